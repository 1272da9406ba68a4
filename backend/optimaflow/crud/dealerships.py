import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from optimaflow.core.errors import NotFound, StoreUnavailable, ValidationError
from optimaflow.models.dealership import Dealership
from optimaflow.models.enums import DealershipStatus

logger = logging.getLogger(__name__)


def list_dealerships(
    db: Optional[Session],
    status: Optional[DealershipStatus] = None,
) -> List[Dealership]:
    if db is None:
        logger.warning("No se pueden listar concesionarios: base de datos no disponible")
        return []

    consulta = db.query(Dealership)
    if status is not None:
        consulta = consulta.filter(Dealership.status == status)
    return consulta.order_by(Dealership.created_at.desc(), Dealership.id.desc()).all()


def get_dealership(db: Optional[Session], dealership_id: int) -> Optional[Dealership]:
    if db is None:
        logger.warning("No se puede obtener el concesionario %s: base de datos no disponible", dealership_id)
        return None
    return db.query(Dealership).filter(Dealership.id == dealership_id).first()


def get_dealership_by_osm_id(db: Session, osm_id: int) -> Optional[Dealership]:
    return db.query(Dealership).filter(Dealership.osm_id == osm_id).first()


def create_dealership(db: Optional[Session], datos: dict) -> Dealership:
    if db is None:
        raise StoreUnavailable()
    if not (datos.get("name") or "").strip():
        raise ValidationError("El nombre del concesionario es obligatorio")

    concesionario = Dealership(**datos)
    db.add(concesionario)
    db.commit()
    db.refresh(concesionario)
    return concesionario


def update_dealership(db: Optional[Session], dealership_id: int, cambios: dict) -> Dealership:
    if db is None:
        raise StoreUnavailable()
    if "name" in cambios and not (cambios["name"] or "").strip():
        raise ValidationError("El nombre del concesionario es obligatorio")
    if "status" in cambios and cambios["status"] is None:
        raise ValidationError("El estado del concesionario no puede ser nulo")

    concesionario = get_dealership(db, dealership_id)
    if not concesionario:
        raise NotFound("Concesionario", dealership_id)

    for campo, valor in cambios.items():
        setattr(concesionario, campo, valor)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(concesionario)
    return concesionario


def delete_dealership(db: Optional[Session], dealership_id: int) -> None:
    if db is None:
        raise StoreUnavailable()

    concesionario = get_dealership(db, dealership_id)
    if not concesionario:
        raise NotFound("Concesionario", dealership_id)

    db.delete(concesionario)
    db.commit()
