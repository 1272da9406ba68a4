from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from optimaflow.models.enums import ActivityType

class ActivityCreate(BaseModel):
    opportunity_id: int
    type: ActivityType
    title: str = Field(..., min_length=1, max_length=255)
    notes: Optional[str] = None
    result: Optional[str] = Field(None, max_length=255)

class Activity(ActivityCreate):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
