from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from optimaflow.db.base import get_db
from optimaflow.schemas.leads import ImportLeadsRequest, ImportLeadsResponse
from optimaflow.services.lead_importer import import_leads

router = APIRouter(prefix="/leads", tags=["leads"])

@router.post("/import", response_model=ImportLeadsResponse)
def importar_leads(datos: ImportLeadsRequest, db: Optional[Session] = Depends(get_db)):
    resultado = import_leads(db, datos.user_id, datos.leads)
    return {"success": True, "count": resultado.imported, "skipped": resultado.skipped}
