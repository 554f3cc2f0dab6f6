"""
Trip model and trip membership.
"""
from datetime import datetime

from sqlalchemy import Column, String, Date, DateTime, Enum as SQLEnum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel
import enum


class TripMemberRole(str, enum.Enum):
    """Access level of a trip member."""
    OWNER = "Owner"
    EDITOR = "Editor"
    VIEWER = "Viewer"


# Roles allowed to change a trip's children
WRITE_ROLES = (TripMemberRole.OWNER, TripMemberRole.EDITOR)

ROLE_ORDER = {
    TripMemberRole.OWNER: 0,
    TripMemberRole.EDITOR: 1,
    TripMemberRole.VIEWER: 2,
}


class Trip(BaseModel):
    """Top-level aggregate owning all travel-planning data."""
    __tablename__ = "trips"

    owner_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=True)
    base_currency = Column(String(3), nullable=False, default="EUR")

    # Relationships
    owner = relationship("User", back_populates="owned_trips")
    members = relationship("TripMember", back_populates="trip", cascade="all, delete-orphan")
    stages = relationship("Stage", back_populates="trip", cascade="all, delete-orphan")
    items = relationship("Item", back_populates="trip", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
    fuel_entries = relationship("FuelEntry", back_populates="trip", cascade="all, delete-orphan")
    accommodation_entries = relationship("AccommodationEntry", back_populates="trip", cascade="all, delete-orphan")
    service_entries = relationship("ServiceEntry", back_populates="trip", cascade="all, delete-orphan")
    attachments = relationship("Attachment", back_populates="trip", cascade="all, delete-orphan")


class TripMember(BaseModel):
    """Junction table granting a user access to a trip with a role."""
    __tablename__ = "trip_members"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(SQLEnum(TripMemberRole), default=TripMemberRole.VIEWER, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="members")
    user = relationship("User", back_populates="memberships")

    __table_args__ = (
        UniqueConstraint('trip_id', 'user_id', name='uq_trip_member'),
    )
