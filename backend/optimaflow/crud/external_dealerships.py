import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from optimaflow.core.errors import ValidationError
from optimaflow.models.dealership import ExternalDealership

logger = logging.getLogger(__name__)

LIMITE_MAXIMO = 100


def list_external_dealerships(
    db: Optional[Session],
    limit: int = 50,
    offset: int = 0,
    query: Optional[str] = None,
) -> List[ExternalDealership]:
    """Página del catálogo externo, filtrando por nombre, ciudad o país.

    La búsqueda no distingue mayúsculas. La paginación es por offset, sin
    estabilidad frente a escrituras concurrentes.
    """
    if limit < 1 or limit > LIMITE_MAXIMO:
        raise ValidationError(f"limit debe estar entre 1 y {LIMITE_MAXIMO}")
    if offset < 0:
        raise ValidationError("offset no puede ser negativo")

    if db is None:
        logger.warning("No se puede listar el catálogo externo: base de datos no disponible")
        return []

    consulta = db.query(ExternalDealership)
    termino = (query or "").strip()
    if termino:
        patron = f"%{termino}%"
        consulta = consulta.filter(or_(
            ExternalDealership.name.ilike(patron),
            ExternalDealership.city.ilike(patron),
            ExternalDealership.country.ilike(patron),
        ))

    return consulta.order_by(
        ExternalDealership.name, ExternalDealership.id
    ).offset(offset).limit(limit).all()


def get_external_dealership(db: Optional[Session], external_id: str) -> Optional[ExternalDealership]:
    if db is None:
        logger.warning("No se puede obtener el registro externo %s: base de datos no disponible", external_id)
        return None
    return db.query(ExternalDealership).filter(ExternalDealership.id == external_id).first()
