"""
Pydantic schemas for Attachment entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AttachmentCreate(BaseModel):
    """Metadata of a file already uploaded to blob storage."""
    item_id: Optional[int] = None
    expense_id: Optional[int] = None
    blob_url: str = Field(min_length=1, max_length=2000)
    file_name: str = Field(min_length=1, max_length=500)
    mime_type: str = Field(min_length=1, max_length=200)
    size: int = Field(ge=0)


class AttachmentResponse(BaseModel):
    """Schema for attachment response."""
    id: int
    trip_id: int
    item_id: Optional[int] = None
    expense_id: Optional[int] = None
    blob_url: str
    file_name: str
    mime_type: str
    size: int
    created_by_user_id: int
    created_at: datetime

    class Config:
        from_attributes = True
