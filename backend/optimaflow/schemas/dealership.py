from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from optimaflow.models.enums import DealershipStatus

def _nombre_no_vacio(valor: Optional[str]) -> Optional[str]:
    if valor is not None and not valor.strip():
        raise ValueError("El nombre del concesionario es obligatorio")
    return valor.strip() if valor is not None else valor

class DealershipBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    website: Optional[str] = Field(None, max_length=255)
    latitude: Optional[str] = Field(None, max_length=32)
    longitude: Optional[str] = Field(None, max_length=32)
    status: DealershipStatus = DealershipStatus.ACTIVO
    notes: Optional[str] = None

class DealershipCreate(DealershipBase):
    @field_validator("name")
    @classmethod
    def validar_nombre(cls, valor):
        return _nombre_no_vacio(valor)

class DealershipUpdate(BaseModel):
    """Actualización parcial: solo se aplican los campos enviados."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    website: Optional[str] = Field(None, max_length=255)
    latitude: Optional[str] = Field(None, max_length=32)
    longitude: Optional[str] = Field(None, max_length=32)
    status: Optional[DealershipStatus] = None
    notes: Optional[str] = None

    # Omitir name o status es válido; enviarlos como null no (columnas NOT NULL)
    @field_validator("name", "status")
    @classmethod
    def rechazar_nulo(cls, valor, info):
        if valor is None:
            raise ValueError(f"{info.field_name} no puede ser nulo")
        return valor

    @field_validator("name")
    @classmethod
    def validar_nombre(cls, valor):
        return _nombre_no_vacio(valor)

class Dealership(DealershipBase):
    id: int
    osm_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ExternalDealership(BaseModel):
    id: str
    name: str
    brand: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    osm_id: Optional[int] = None

    class Config:
        from_attributes = True
