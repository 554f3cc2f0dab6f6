"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, String, Numeric, Date, Boolean, ForeignKey, Integer, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from mototrip.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    stage_id = Column(Integer, ForeignKey("stages.id", ondelete="SET NULL"), nullable=True, index=True)
    date = Column(Date, nullable=False, index=True)
    category = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False, default="")
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")  # Free 3-letter code, never converted
    paid_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_shared = Column(Boolean, default=False, nullable=False)
    note = Column(String(1000), nullable=True)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    row_version = Column(Integer, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    stage = relationship("Stage", back_populates="expenses")
    paid_by = relationship("User", foreign_keys=[paid_by_user_id])
    shares = relationship("ExpenseShare", back_populates="expense", cascade="all, delete-orphan",
                          order_by="ExpenseShare.id")
    attachments = relationship("Attachment", back_populates="expense", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_expenses_trip_category", "trip_id", "category"),
    )
    __mapper_args__ = {"version_id_col": row_version}


class ExpenseShare(BaseModel):
    """A member's portion of a shared expense, in the expense currency."""
    __tablename__ = "expense_shares"

    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    share_amount = Column(Numeric(18, 2), nullable=False)

    # Relationships
    expense = relationship("Expense", back_populates="shares")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint('expense_id', 'user_id', name='uq_expense_share_user'),
    )
