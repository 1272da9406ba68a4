import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from optimaflow.models.enums import OpportunityStatus
from optimaflow.models.opportunity import Opportunity
from optimaflow.schemas.opportunity import OpportunityMetrics, StatusCount

logger = logging.getLogger(__name__)


def formatear_promedio(promedio) -> str:
    """Media con un decimal, redondeando las mitades hacia arriba (7.25 -> "7.3").

    None (sin oportunidades) se muestra como "0.0". PostgreSQL devuelve Decimal
    y SQLite float; ambos pasan por str() para no arrastrar error binario.
    """
    valor = Decimal(str(promedio if promedio is not None else 0))
    return str(valor.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def calcular_win_rate(conteos: Dict[OpportunityStatus, int]) -> int:
    cerradas = conteos.get(OpportunityStatus.CERRADO, 0)
    perdidas = conteos.get(OpportunityStatus.PERDIDO, 0)
    if cerradas + perdidas == 0:
        return 0
    return round(cerradas / (cerradas + perdidas) * 100)


def construir_metricas(conteos: Dict[OpportunityStatus, int], promedio) -> OpportunityMetrics:
    total = sum(conteos.values())
    return OpportunityMetrics(
        total=total,
        by_status=[
            StatusCount(status=estado, label=estado.label, count=conteos.get(estado, 0))
            for estado in OpportunityStatus
        ],
        average_score=formatear_promedio(promedio if total else None),
        win_rate=calcular_win_rate(conteos),
    )


def get_opportunity_metrics(db: Optional[Session], user_id: int) -> OpportunityMetrics:
    """Métricas del pipeline de un usuario para el dashboard."""
    if db is None:
        logger.warning("No se pueden calcular métricas: base de datos no disponible")
        return construir_metricas({}, None)

    filas = db.query(
        Opportunity.status, func.count(Opportunity.id)
    ).filter(Opportunity.user_id == user_id).group_by(Opportunity.status).all()
    conteos = {OpportunityStatus(estado): cantidad for estado, cantidad in filas}

    promedio = db.query(
        func.avg(Opportunity.opportunity_score)
    ).filter(Opportunity.user_id == user_id).scalar()

    return construir_metricas(conteos, promedio)
