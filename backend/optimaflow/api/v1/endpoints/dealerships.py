from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from optimaflow.crud import dealerships as crud
from optimaflow.db.base import get_db
from optimaflow.models.enums import DealershipStatus
from optimaflow.schemas.common import CreatedId, Success
from optimaflow.schemas.dealership import Dealership, DealershipCreate, DealershipUpdate

router = APIRouter(prefix="/dealerships", tags=["dealerships"])

@router.get("/", response_model=List[Dealership])
def listar_concesionarios(
    estado: Optional[DealershipStatus] = Query(None, alias="status"),
    db: Optional[Session] = Depends(get_db)
):
    return crud.list_dealerships(db, estado)

@router.post("/", response_model=CreatedId, status_code=status.HTTP_201_CREATED)
def crear_concesionario(concesionario: DealershipCreate, db: Optional[Session] = Depends(get_db)):
    nuevo = crud.create_dealership(db, concesionario.model_dump())
    return {"id": nuevo.id}

@router.get("/{dealership_id}", response_model=Optional[Dealership])
def obtener_concesionario(dealership_id: int, db: Optional[Session] = Depends(get_db)):
    return crud.get_dealership(db, dealership_id)

@router.patch("/{dealership_id}", response_model=Dealership)
def actualizar_concesionario(
    dealership_id: int,
    cambios: DealershipUpdate,
    db: Optional[Session] = Depends(get_db)
):
    return crud.update_dealership(db, dealership_id, cambios.model_dump(exclude_unset=True))

@router.delete("/{dealership_id}", response_model=Success)
def eliminar_concesionario(dealership_id: int, db: Optional[Session] = Depends(get_db)):
    crud.delete_dealership(db, dealership_id)
    return {"success": True}
