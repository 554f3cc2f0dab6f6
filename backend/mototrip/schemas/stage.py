"""
Pydantic schemas for Stage entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date as dt_date
from mototrip.schemas.common import AuditedResponse, VersionedUpdate


class StageCreate(BaseModel):
    """Schema for stage creation."""
    date: dt_date
    start_text: str = Field(min_length=1, max_length=500)
    end_text: str = Field(min_length=1, max_length=500)
    planned_km: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = Field(default=None, max_length=2000)


class StageUpdate(VersionedUpdate):
    """Schema for stage update."""
    date: Optional[dt_date] = None
    start_text: Optional[str] = Field(default=None, min_length=1, max_length=500)
    end_text: Optional[str] = Field(default=None, min_length=1, max_length=500)
    planned_km: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = Field(default=None, max_length=2000)


class StageResponse(AuditedResponse):
    """Schema for stage response."""
    id: int
    trip_id: int
    date: dt_date
    start_text: str
    end_text: str
    planned_km: Optional[int] = None
    notes: Optional[str] = None
