from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from optimaflow.db.base import Base
from optimaflow.models.enums import ActivityType, valores

class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    opportunity_id = Column(Integer, ForeignKey("opportunities.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(ActivityType, name="activity_type", values_callable=valores), nullable=False)
    title = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    result = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    opportunity = relationship("Opportunity", back_populates="activities")

    def __repr__(self):
        return f"<Activity {self.type} de oportunidad {self.opportunity_id}>"
