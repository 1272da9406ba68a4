import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from optimaflow.core.errors import NotFound, StoreUnavailable
from optimaflow.db.base import ahora
from optimaflow.models.enums import OpportunityStatus
from optimaflow.models.opportunity import Opportunity
from optimaflow.schemas.opportunity import OpportunityCreate

logger = logging.getLogger(__name__)


def list_opportunities(db: Optional[Session], user_id: int) -> List[Opportunity]:
    """Oportunidades del usuario, las más recientes primero."""
    if db is None:
        logger.warning("No se pueden listar oportunidades: base de datos no disponible")
        return []
    return db.query(Opportunity).filter(
        Opportunity.user_id == user_id
    ).order_by(Opportunity.created_at.desc(), Opportunity.id.desc()).all()


def get_opportunity(db: Optional[Session], opportunity_id: int) -> Optional[Opportunity]:
    if db is None:
        logger.warning("No se puede obtener la oportunidad %s: base de datos no disponible", opportunity_id)
        return None
    return db.query(Opportunity).filter(Opportunity.id == opportunity_id).first()


def create_opportunity(db: Optional[Session], datos: OpportunityCreate) -> int:
    if db is None:
        raise StoreUnavailable()

    oportunidad = Opportunity(
        **datos.model_dump(),
        status=OpportunityStatus.CONTACTADO,
        contact_date=ahora(),
    )
    db.add(oportunidad)
    db.commit()
    db.refresh(oportunidad)
    return oportunidad.id


def update_opportunity(db: Optional[Session], opportunity_id: int, cambios: dict) -> Optional[Opportunity]:
    """Aplica ``cambios`` y devuelve la oportunidad actualizada, o None si no existe."""
    if db is None:
        raise StoreUnavailable()

    oportunidad = get_opportunity(db, opportunity_id)
    if not oportunidad:
        return None

    for campo, valor in cambios.items():
        setattr(oportunidad, campo, valor)
    db.commit()
    db.refresh(oportunidad)
    return oportunidad


def delete_opportunity(db: Optional[Session], opportunity_id: int) -> None:
    """Borra la oportunidad y, en cascada, todas sus actividades."""
    if db is None:
        raise StoreUnavailable()

    oportunidad = get_opportunity(db, opportunity_id)
    if not oportunidad:
        raise NotFound("Oportunidad", opportunity_id)

    db.delete(oportunidad)
    db.commit()
