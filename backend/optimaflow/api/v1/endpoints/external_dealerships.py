from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from optimaflow.crud import external_dealerships as crud
from optimaflow.crud.external_dealerships import LIMITE_MAXIMO
from optimaflow.db.base import get_db
from optimaflow.schemas.common import CreatedId
from optimaflow.schemas.dealership import ExternalDealership
from optimaflow.services.dealership_import import import_external_dealership

router = APIRouter(prefix="/external-dealerships", tags=["external-dealerships"])

@router.get("/", response_model=List[ExternalDealership])
def listar_catalogo_externo(
    limit: int = Query(50, ge=1, le=LIMITE_MAXIMO),
    offset: int = Query(0, ge=0),
    query: Optional[str] = None,
    db: Optional[Session] = Depends(get_db)
):
    return crud.list_external_dealerships(db, limit=limit, offset=offset, query=query)

@router.get("/{external_id}", response_model=Optional[ExternalDealership])
def obtener_registro_externo(external_id: str, db: Optional[Session] = Depends(get_db)):
    return crud.get_external_dealership(db, external_id)

@router.post("/{external_id}/import", response_model=CreatedId)
def importar_registro_externo(external_id: str, db: Optional[Session] = Depends(get_db)):
    """
    Copia el registro externo a la tabla de concesionarios (estado pendiente).
    Repetir la importación devuelve el mismo concesionario.
    """
    return {"id": import_external_dealership(db, external_id)}
