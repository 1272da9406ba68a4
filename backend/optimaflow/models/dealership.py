import uuid

from sqlalchemy import Column, Integer, BigInteger, String, DateTime, Text, Float, Enum
from sqlalchemy.sql import func
from optimaflow.db.base import Base
from optimaflow.models.enums import DealershipStatus, valores

class Dealership(Base):
    __tablename__ = "dealerships"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    latitude = Column(String(32), nullable=True)  # Guardadas como texto
    longitude = Column(String(32), nullable=True)
    status = Column(
        Enum(DealershipStatus, name="dealership_status", values_callable=valores),
        nullable=False,
        default=DealershipStatus.ACTIVO,
    )
    notes = Column(Text, nullable=True)
    # La unicidad de osm_id es la garantía real contra importaciones duplicadas
    osm_id = Column(BigInteger, unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Dealership {self.name} [{self.status}]>"

class ExternalDealership(Base):
    """Catálogo externo (OpenStreetMap), de solo lectura para la API."""

    __tablename__ = "external_dealerships"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    brand = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True, index=True)
    address = Column(String(255), nullable=True)
    postal_code = Column(String(20), nullable=True)
    phone = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    osm_id = Column(BigInteger, unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<ExternalDealership {self.name} (osm {self.osm_id})>"
