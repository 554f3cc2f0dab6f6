"""
Service entry model: maintenance or repair done on the motorcycle.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class ServiceEntry(BaseModel):
    __tablename__ = "service_entries"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    service_type = Column(String(100), nullable=False)  # Oil change, tyres, chain...
    description = Column(String(500), nullable=False, default="")
    service_date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    location = Column(String(200), nullable=False, default="")
    mileage = Column(Integer, nullable=True)
    note = Column(String(1000), nullable=True)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    row_version = Column(Integer, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="service_entries")

    __mapper_args__ = {"version_id_col": row_version}
