import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from optimaflow.core.errors import NotFound, StoreUnavailable
from optimaflow.crud.dealerships import create_dealership, get_dealership_by_osm_id
from optimaflow.crud.external_dealerships import get_external_dealership
from optimaflow.models.dealership import ExternalDealership
from optimaflow.models.enums import DealershipStatus

logger = logging.getLogger(__name__)


def _texto(valor) -> Optional[str]:
    return None if valor is None else str(valor)


def nota_de_procedencia(externo: ExternalDealership) -> str:
    if externo.osm_id is not None:
        lineas = [f"Importado desde OpenStreetMap (osm_id: {externo.osm_id})"]
    else:
        lineas = [f"Importado desde catálogo externo (id: {externo.id})"]
    if externo.brand:
        lineas.append(f"Marca: {externo.brand}")
    if externo.postal_code:
        lineas.append(f"Código postal: {externo.postal_code}")
    return "\n".join(lineas)


def import_external_dealership(db: Optional[Session], external_id: str) -> int:
    """Promueve un registro del catálogo externo a la tabla de concesionarios.

    Es idempotente por ``osm_id``: si ya existe un concesionario con ese
    identificador se devuelve su id sin crear otra fila. Los importados
    quedan en estado ``pendiente`` hasta que alguien los revise.
    """
    if db is None:
        raise StoreUnavailable()

    externo = get_external_dealership(db, external_id)
    if not externo:
        raise NotFound("Concesionario externo", external_id)

    osm_id = externo.osm_id
    if osm_id is not None:
        existente = get_dealership_by_osm_id(db, osm_id)
        if existente:
            logger.info("Registro %s ya importado como concesionario %s", external_id, existente.id)
            return existente.id

    datos = {
        "name": externo.name,
        "address": externo.address,
        "city": externo.city,
        "country": externo.country,
        "phone": externo.phone,
        "website": externo.website,
        "latitude": _texto(externo.latitude),
        "longitude": _texto(externo.longitude),
        "status": DealershipStatus.PENDIENTE,
        "notes": nota_de_procedencia(externo),
        "osm_id": osm_id,
    }

    try:
        concesionario = create_dealership(db, datos)
    except IntegrityError:
        # Otra importación concurrente ganó la restricción única de osm_id
        db.rollback()
        existente = get_dealership_by_osm_id(db, osm_id) if osm_id is not None else None
        if existente is None:
            raise
        logger.info("Importación concurrente de osm_id %s resuelta al concesionario %s", osm_id, existente.id)
        return existente.id

    logger.info("Registro externo %s importado como concesionario %s", external_id, concesionario.id)
    return concesionario.id
