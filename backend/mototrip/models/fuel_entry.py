"""
Fuel entry model: one refuelling stop.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class FuelEntry(BaseModel):
    __tablename__ = "fuel_entries"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    quantity = Column(Numeric(10, 2), nullable=False)  # Litres
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    unit_price = Column(Numeric(18, 3), nullable=False)  # amount / quantity, computed server side
    mileage = Column(Integer, nullable=False, index=True)  # Odometer reading
    location = Column(String(200), nullable=False, default="")
    note = Column(String(1000), nullable=True)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    row_version = Column(Integer, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="fuel_entries")

    __mapper_args__ = {"version_id_col": row_version}
