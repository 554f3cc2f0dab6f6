"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date as dt_date
from decimal import Decimal
from mototrip.schemas.common import AuditedResponse, Currency, VersionedUpdate


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    stage_id: Optional[int] = None
    date: Optional[dt_date] = None  # Defaults to today
    category: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None  # Defaults to the trip's base currency
    paid_by_user_id: Optional[int] = None  # Defaults to the current user
    is_shared: bool = False
    shared_with_user_ids: Optional[List[int]] = None  # All members when omitted
    note: Optional[str] = Field(default=None, max_length=1000)


class ExpenseUpdate(VersionedUpdate):
    """Schema for expense update."""
    stage_id: Optional[int] = None
    date: Optional[dt_date] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=18, decimal_places=2)
    currency: Optional[Currency] = None
    paid_by_user_id: Optional[int] = None
    is_shared: Optional[bool] = None
    shared_with_user_ids: Optional[List[int]] = None
    note: Optional[str] = Field(default=None, max_length=1000)


class ExpenseShareResponse(BaseModel):
    """Schema for one member's share of an expense."""
    user_id: int
    display_name: str
    share_amount: Decimal


class ExpenseResponse(AuditedResponse):
    """Schema for expense response."""
    id: int
    trip_id: int
    stage_id: Optional[int] = None
    date: dt_date
    category: str
    description: str
    amount: Decimal
    currency: str
    paid_by_user_id: int
    is_shared: bool
    note: Optional[str] = None
    shares: List[ExpenseShareResponse] = []


class ExpenseCategoryTotal(BaseModel):
    """Total spent in one category and currency."""
    category: str
    currency: str
    total_amount: Decimal
    expense_count: int


class CurrencyTotal(BaseModel):
    currency: str
    total_amount: Decimal


class ExpenseSummaryResponse(BaseModel):
    """Schema for expense summary response."""
    trip_id: int
    base_currency: str
    expense_count: int
    by_category: List[ExpenseCategoryTotal]
    totals_by_currency: List[CurrencyTotal]
