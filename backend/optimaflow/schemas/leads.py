from pydantic import BaseModel, Field
from typing import List, Optional

class Lead(BaseModel):
    """Lead preparado externamente (p. ej. exportado desde NotebookLM)."""

    company_name: str = Field(..., min_length=1, max_length=255)
    country: str = Field(..., max_length=100)
    company_type: str = Field(..., max_length=100)
    website: Optional[str] = None
    opportunity_score: int
    weaknesses: Optional[List[str]] = None
    contact_person: Optional[str] = None
    notes: Optional[str] = None

class ImportLeadsRequest(BaseModel):
    user_id: int
    leads: List[Lead]

class ImportLeadsResponse(BaseModel):
    success: bool
    count: int
    skipped: int
