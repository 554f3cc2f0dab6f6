"""
User model linked to an Auth0 subject.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class User(BaseModel):
    """Local identity row for an external Auth0 subject."""
    __tablename__ = "users"

    auth0_subject = Column(String(250), unique=True, nullable=False, index=True)
    display_name = Column(String(200), nullable=False, default="")
    email = Column(String(320), nullable=True, index=True)

    # Relationships
    owned_trips = relationship("Trip", back_populates="owner")
    memberships = relationship("TripMember", back_populates="user", cascade="all, delete-orphan")
