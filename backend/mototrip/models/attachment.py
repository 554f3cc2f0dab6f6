"""
Attachment model: metadata of a file stored in blob storage.
"""
from sqlalchemy import Column, String, BigInteger, ForeignKey, Integer
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class Attachment(BaseModel):
    __tablename__ = "attachments"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=True, index=True)
    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=True, index=True)
    blob_url = Column(String(2000), nullable=False)
    file_name = Column(String(500), nullable=False)
    mime_type = Column(String(200), nullable=False)
    size = Column(BigInteger, nullable=False, default=0)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="attachments")
    item = relationship("Item", back_populates="attachments")
    expense = relationship("Expense", back_populates="attachments")
