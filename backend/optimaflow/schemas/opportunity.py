from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from optimaflow.models.enums import OpportunityStatus

class OpportunityBase(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    country: str = Field(..., min_length=1, max_length=100)
    company_type: str = Field(..., min_length=1, max_length=100)
    opportunity_score: int
    strategy_id: Optional[str] = Field(None, max_length=255)

class OpportunityCreate(OpportunityBase):
    user_id: int

class OpportunityUpdate(BaseModel):
    status: Optional[OpportunityStatus] = None

class Opportunity(OpportunityBase):
    id: int
    user_id: int
    status: OpportunityStatus
    contact_date: Optional[datetime] = None
    last_activity_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class StatusCount(BaseModel):
    status: OpportunityStatus
    label: str
    count: int

class OpportunityMetrics(BaseModel):
    total: int
    by_status: List[StatusCount]
    average_score: str  # Un decimal, p. ej. "7.5"
    win_rate: int  # Porcentaje de cerradas sobre cerradas + perdidas
