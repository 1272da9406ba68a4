"""Importación masiva de leads preparados fuera de la app.

Cada lead se guarda en su propia transacción: un lead que falla se registra
en el log y se salta, y el resto del lote continúa.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from optimaflow.core.errors import StoreUnavailable
from optimaflow.db.base import ahora
from optimaflow.models.activity import Activity
from optimaflow.models.enums import ActivityType, OpportunityStatus
from optimaflow.models.opportunity import Opportunity
from optimaflow.schemas.leads import Lead

logger = logging.getLogger(__name__)

TITULO_NOTA_IMPORTACION = "Importado desde fuente externa"


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    failed: int = 0


def componer_nota(lead: Lead) -> str:
    """Une los datos opcionales del lead en una sola nota (vacía si no hay ninguno)."""
    partes = [
        f"Notas: {lead.notes}" if lead.notes else "",
        f"Website: {lead.website}" if lead.website else "",
        f"Contacto: {lead.contact_person}" if lead.contact_person else "",
        f"Debilidades detectadas: {', '.join(lead.weaknesses)}" if lead.weaknesses else "",
    ]
    return "\n\n".join(parte for parte in partes if parte)


def _es_duplicado(db: Session, company_name: str) -> bool:
    # Coincidencia exacta, sin normalizar mayúsculas ni espacios
    return db.query(Opportunity.id).filter(
        Opportunity.company_name == company_name
    ).first() is not None


def _insertar_lead(db: Session, user_id: int, lead: Lead, momento: datetime) -> Opportunity:
    oportunidad = Opportunity(
        user_id=user_id,
        company_name=lead.company_name,
        country=lead.country,
        company_type=lead.company_type,
        status=OpportunityStatus.CONTACTADO,
        opportunity_score=lead.opportunity_score,
        contact_date=momento,
        last_activity_date=momento,
    )
    db.add(oportunidad)
    db.flush()

    nota = componer_nota(lead)
    if nota:
        db.add(Activity(
            opportunity_id=oportunidad.id,
            type=ActivityType.NOTA,
            title=TITULO_NOTA_IMPORTACION,
            notes=nota,
            created_at=momento,
        ))
    return oportunidad


def import_leads(db: Optional[Session], user_id: int, leads: Iterable[Lead]) -> ImportResult:
    if db is None:
        raise StoreUnavailable("No se pueden importar leads: base de datos no disponible")

    leads = list(leads)
    logger.info("Iniciando importación de %d leads para el usuario %s", len(leads), user_id)
    resultado = ImportResult()

    for lead in leads:
        try:
            if _es_duplicado(db, lead.company_name):
                logger.info("Duplicado omitido: %s", lead.company_name)
                resultado.skipped += 1
                continue

            _insertar_lead(db, user_id, lead, ahora())
            db.commit()
            resultado.imported += 1
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Error importando %s", lead.company_name)
            resultado.failed += 1

    logger.info(
        "Importación completa. Importados: %d, omitidos: %d, fallidos: %d",
        resultado.imported, resultado.skipped, resultado.failed,
    )
    return resultado
