"""
Item model: a note, link or booking attached to a trip.
"""
import enum

from sqlalchemy import Column, String, Text, Enum as SQLEnum, ForeignKey, Integer, Index
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class ItemType(str, enum.Enum):
    NOTE = "Note"
    LINK = "Link"
    BOOKING = "Booking"


class Item(BaseModel):
    """Free-form trip item, optionally pinned to a stage."""
    __tablename__ = "items"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    stage_id = Column(Integer, ForeignKey("stages.id", ondelete="SET NULL"), nullable=True, index=True)
    type = Column(SQLEnum(ItemType), nullable=False, default=ItemType.NOTE)
    title = Column(String(500), nullable=False)
    body = Column(Text, nullable=True)
    url = Column(String(2000), nullable=True)
    location_json = Column(String(1000), nullable=True)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    row_version = Column(Integer, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="items")
    stage = relationship("Stage", back_populates="items")
    attachments = relationship("Attachment", back_populates="item", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_items_trip_type", "trip_id", "type"),
    )
    __mapper_args__ = {"version_id_col": row_version}
