import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from optimaflow.core.errors import NotFound, StoreUnavailable
from optimaflow.db.base import ahora
from optimaflow.models.activity import Activity
from optimaflow.models.opportunity import Opportunity
from optimaflow.schemas.activity import ActivityCreate

logger = logging.getLogger(__name__)


def list_activities(db: Optional[Session], opportunity_id: int) -> List[Activity]:
    if db is None:
        logger.warning("No se pueden listar actividades: base de datos no disponible")
        return []
    return db.query(Activity).filter(
        Activity.opportunity_id == opportunity_id
    ).order_by(Activity.created_at.desc(), Activity.id.desc()).all()


def create_activity(db: Optional[Session], datos: ActivityCreate) -> int:
    """Crea la actividad y refresca ``last_activity_date`` de su oportunidad.

    Ambas escrituras van en la misma transacción: si una falla no queda
    ninguna de las dos.
    """
    if db is None:
        raise StoreUnavailable()

    oportunidad = db.query(Opportunity).filter(Opportunity.id == datos.opportunity_id).first()
    if not oportunidad:
        raise NotFound("Oportunidad", datos.opportunity_id)

    momento = ahora()
    actividad = Activity(**datos.model_dump(), created_at=momento)
    try:
        db.add(actividad)
        oportunidad.last_activity_date = momento
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(actividad)
    return actividad.id


def delete_activity(db: Optional[Session], activity_id: int) -> None:
    if db is None:
        raise StoreUnavailable()

    actividad = db.query(Activity).filter(Activity.id == activity_id).first()
    if not actividad:
        raise NotFound("Actividad", activity_id)

    db.delete(actividad)
    db.commit()
