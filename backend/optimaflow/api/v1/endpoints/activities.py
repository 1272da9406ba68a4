from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from optimaflow.crud import activities as crud
from optimaflow.db.base import get_db
from optimaflow.schemas.activity import Activity, ActivityCreate
from optimaflow.schemas.common import CreatedId, Success

router = APIRouter(prefix="/activities", tags=["activities"])

@router.get("/", response_model=List[Activity])
def listar_actividades(opportunity_id: int, db: Optional[Session] = Depends(get_db)):
    return crud.list_activities(db, opportunity_id)

@router.post("/", response_model=CreatedId, status_code=status.HTTP_201_CREATED)
def crear_actividad(actividad: ActivityCreate, db: Optional[Session] = Depends(get_db)):
    return {"id": crud.create_activity(db, actividad)}

@router.delete("/{activity_id}", response_model=Success)
def eliminar_actividad(activity_id: int, db: Optional[Session] = Depends(get_db)):
    crud.delete_activity(db, activity_id)
    return {"success": True}
