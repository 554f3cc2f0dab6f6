"""
Pydantic schemas for ServiceEntry entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date
from decimal import Decimal
from mototrip.schemas.common import AuditedResponse, Currency, VersionedUpdate


class ServiceEntryCreate(BaseModel):
    """Schema for service entry creation."""
    service_type: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    service_date: date
    amount: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None
    location: str = Field(default="", max_length=200)
    mileage: Optional[int] = Field(default=None, ge=0)
    note: Optional[str] = Field(default=None, max_length=1000)


class ServiceEntryUpdate(VersionedUpdate):
    """Schema for service entry update."""
    service_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    service_date: Optional[date] = None
    amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None
    location: Optional[str] = Field(default=None, max_length=200)
    mileage: Optional[int] = Field(default=None, ge=0)
    note: Optional[str] = Field(default=None, max_length=1000)


class ServiceEntryResponse(AuditedResponse):
    """Schema for service entry response."""
    id: int
    trip_id: int
    service_type: str
    description: str
    service_date: date
    amount: Decimal
    currency: str
    location: str
    mileage: Optional[int] = None
    note: Optional[str] = None
