"""
Accommodation entry model: one stay between check-in and check-out.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class AccommodationEntry(BaseModel):
    __tablename__ = "accommodation_entries"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    accommodation_type = Column(String(50), nullable=False)  # Hotel, Camping, Hostel...
    check_in_date = Column(Date, nullable=False, index=True)
    check_out_date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    location = Column(String(200), nullable=False, default="")
    note = Column(String(1000), nullable=True)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    row_version = Column(Integer, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="accommodation_entries")

    __mapper_args__ = {"version_id_col": row_version}
