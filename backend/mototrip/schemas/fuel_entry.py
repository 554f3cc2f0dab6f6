"""
Pydantic schemas for FuelEntry entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date as dt_date
from decimal import Decimal
from mototrip.schemas.common import AuditedResponse, Currency, VersionedUpdate


class FuelEntryCreate(BaseModel):
    """Schema for fuel entry creation."""
    date: dt_date
    quantity: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None
    mileage: int = Field(ge=0)
    location: str = Field(default="", max_length=200)
    note: Optional[str] = Field(default=None, max_length=1000)


class FuelEntryUpdate(VersionedUpdate):
    """Schema for fuel entry update."""
    date: Optional[dt_date] = None
    quantity: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None
    mileage: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = Field(default=None, max_length=200)
    note: Optional[str] = Field(default=None, max_length=1000)


class FuelEntryResponse(AuditedResponse):
    """Schema for fuel entry response."""
    id: int
    trip_id: int
    date: dt_date
    quantity: Decimal
    amount: Decimal
    currency: str
    unit_price: Decimal
    mileage: int
    location: str
    note: Optional[str] = None
