"""
Stage model: a dated leg of a trip.
"""
from sqlalchemy import Column, String, Date, Text, ForeignKey, Integer, Index
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class Stage(BaseModel):
    """One riding day, from a start point to an end point."""
    __tablename__ = "stages"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_text = Column(String(500), nullable=False)
    end_text = Column(String(500), nullable=False)
    planned_km = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    row_version = Column(Integer, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="stages")
    # Children keep existing when their stage goes away; stage_id is nulled
    items = relationship("Item", back_populates="stage")
    expenses = relationship("Expense", back_populates="stage")

    __table_args__ = (
        Index("ix_stages_trip_date", "trip_id", "date"),
    )
    __mapper_args__ = {"version_id_col": row_version}
