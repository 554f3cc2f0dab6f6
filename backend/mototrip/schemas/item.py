"""
Pydantic schemas for Item entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from mototrip.models.item import ItemType
from mototrip.schemas.common import AuditedResponse, VersionedUpdate


class ItemCreate(BaseModel):
    """Schema for item creation."""
    stage_id: Optional[int] = None
    type: ItemType = ItemType.NOTE
    title: str = Field(min_length=1, max_length=500)
    body: Optional[str] = Field(default=None, max_length=5000)
    url: Optional[str] = Field(default=None, max_length=2000)
    location_json: Optional[str] = Field(default=None, max_length=1000)


class ItemUpdate(VersionedUpdate):
    """Schema for item update."""
    stage_id: Optional[int] = None
    type: Optional[ItemType] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    body: Optional[str] = Field(default=None, max_length=5000)
    url: Optional[str] = Field(default=None, max_length=2000)
    location_json: Optional[str] = Field(default=None, max_length=1000)


class ItemResponse(AuditedResponse):
    """Schema for item response."""
    id: int
    trip_id: int
    stage_id: Optional[int] = None
    type: ItemType
    title: str
    body: Optional[str] = None
    url: Optional[str] = None
    location_json: Optional[str] = None
