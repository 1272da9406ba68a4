from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from optimaflow.crud import opportunities as crud
from optimaflow.db.base import get_db
from optimaflow.schemas.common import CreatedId, Success
from optimaflow.schemas.opportunity import Opportunity, OpportunityCreate, OpportunityMetrics, OpportunityUpdate
from optimaflow.services.pipeline_metrics import get_opportunity_metrics

router = APIRouter(prefix="/opportunities", tags=["opportunities"])

@router.get("/", response_model=List[Opportunity])
def listar_oportunidades(user_id: int, db: Optional[Session] = Depends(get_db)):
    return crud.list_opportunities(db, user_id)

# Debe ir antes de /{opportunity_id}
@router.get("/metrics", response_model=OpportunityMetrics)
def metricas_oportunidades(user_id: int, db: Optional[Session] = Depends(get_db)):
    return get_opportunity_metrics(db, user_id)

@router.post("/", response_model=CreatedId, status_code=status.HTTP_201_CREATED)
def crear_oportunidad(oportunidad: OpportunityCreate, db: Optional[Session] = Depends(get_db)):
    return {"id": crud.create_opportunity(db, oportunidad)}

@router.get("/{opportunity_id}", response_model=Optional[Opportunity])
def obtener_oportunidad(opportunity_id: int, db: Optional[Session] = Depends(get_db)):
    return crud.get_opportunity(db, opportunity_id)

@router.patch("/{opportunity_id}", response_model=Optional[Opportunity])
def actualizar_oportunidad(
    opportunity_id: int,
    cambios: OpportunityUpdate,
    db: Optional[Session] = Depends(get_db)
):
    return crud.update_opportunity(db, opportunity_id, cambios.model_dump(exclude_none=True))

@router.delete("/{opportunity_id}", response_model=Success)
def eliminar_oportunidad(opportunity_id: int, db: Optional[Session] = Depends(get_db)):
    crud.delete_opportunity(db, opportunity_id)
    return {"success": True}
