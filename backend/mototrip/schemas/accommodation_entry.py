"""
Pydantic schemas for AccommodationEntry entity.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date
from decimal import Decimal
from mototrip.schemas.common import AuditedResponse, Currency, VersionedUpdate


class AccommodationEntryCreate(BaseModel):
    """Schema for accommodation entry creation."""
    name: str = Field(min_length=1, max_length=200)
    accommodation_type: str = Field(min_length=1, max_length=50)
    check_in_date: date
    check_out_date: date
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None
    location: str = Field(default="", max_length=200)
    note: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_out_date < self.check_in_date:
            raise ValueError("Check-out date must not be before check-in date")
        return self


class AccommodationEntryUpdate(VersionedUpdate):
    """Schema for accommodation entry update."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    accommodation_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None
    location: Optional[str] = Field(default=None, max_length=200)
    note: Optional[str] = Field(default=None, max_length=1000)


class AccommodationEntryResponse(AuditedResponse):
    """Schema for accommodation entry response."""
    id: int
    trip_id: int
    name: str
    accommodation_type: str
    check_in_date: date
    check_out_date: date
    amount: Decimal
    currency: str
    location: str
    note: Optional[str] = None
