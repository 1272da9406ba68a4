from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from optimaflow.db.base import Base
from optimaflow.models.enums import OpportunityStatus, valores

class Opportunity(Base):
    __tablename__ = "opportunities"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    company_name = Column(String(255), nullable=False, index=True)
    country = Column(String(100), nullable=False)
    company_type = Column(String(100), nullable=False)
    status = Column(
        Enum(OpportunityStatus, name="opportunity_status", values_callable=valores),
        nullable=False,
        default=OpportunityStatus.CONTACTADO,
    )
    opportunity_score = Column(Integer, nullable=False)  # 0-10, sin validar
    strategy_id = Column(String(255), nullable=True)
    contact_date = Column(DateTime(timezone=True), nullable=True)
    last_activity_date = Column(DateTime(timezone=True), nullable=True)  # Se actualiza al crear actividades
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Borrar una oportunidad borra sus actividades
    activities = relationship(
        "Activity",
        back_populates="opportunity",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Opportunity {self.company_name} [{self.status}]>"
