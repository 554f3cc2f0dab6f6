"""
Expense service for expense-related business logic.
"""
import logging
from datetime import date
from decimal import Decimal, ROUND_DOWN
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session
from mototrip.core.errors import ValidationError
from mototrip.models.expense import Expense, ExpenseShare
from mototrip.models.trip import Trip, TripMember
from mototrip.schemas.expense import (
    ExpenseCreate, ExpenseResponse, ExpenseShareResponse,
    ExpenseCategoryTotal, CurrencyTotal, ExpenseSummaryResponse
)
from mototrip.services.entity_service import apply_updates, ensure_stage_in_trip

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

REQUIRED_FIELDS = ("date", "category", "description", "amount", "currency", "paid_by_user_id", "is_shared")


def split_amount(amount: Decimal, user_ids: List[int], payer_id: int) -> Dict[int, Decimal]:
    """Split an amount equally, to the cent.

    The rounding remainder goes to the payer when the payer takes part,
    otherwise to the first participant.
    """
    if not user_ids:
        return {}
    share = (amount / len(user_ids)).quantize(CENT, rounding=ROUND_DOWN)
    shares = {user_id: share for user_id in user_ids}
    remainder = amount - share * len(user_ids)
    if remainder:
        receiver = payer_id if payer_id in shares else user_ids[0]
        shares[receiver] += remainder
    return shares


def _member_ids(trip_id: int, db: Session) -> List[int]:
    rows = db.query(TripMember.user_id).filter(
        TripMember.trip_id == trip_id
    ).order_by(TripMember.id).all()
    return [row[0] for row in rows]


def ensure_member(trip: Trip, user_id: int, db: Session) -> None:
    if user_id != trip.owner_user_id and user_id not in _member_ids(trip.id, db):
        raise ValidationError(f"User {user_id} is not a member of this trip")


def resolve_share_user_ids(trip: Trip, requested: Optional[List[int]], db: Session) -> List[int]:
    """Participants of a shared expense; every member when none are named."""
    member_ids = _member_ids(trip.id, db)
    if not requested:
        return member_ids

    user_ids = []
    for user_id in requested:
        if user_id not in member_ids:
            raise ValidationError(f"User {user_id} is not a member of this trip")
        if user_id not in user_ids:
            user_ids.append(user_id)
    return user_ids


def current_participants(trip: Trip, user_ids: List[int], db: Session) -> List[int]:
    """Previous participants still on the trip; every member when none are left."""
    member_ids = _member_ids(trip.id, db)
    kept = [user_id for user_id in user_ids if user_id in member_ids]
    return kept or member_ids


def rebuild_shares(expense: Expense, user_ids: List[int], db: Session) -> None:
    """Replace the expense shares with an equal split among `user_ids`."""
    expense.shares.clear()
    # Old rows must be gone before re-inserting the same (expense, user) pairs
    db.flush()
    if not expense.is_shared:
        return
    for user_id, amount in split_amount(expense.amount, user_ids, expense.paid_by_user_id).items():
        expense.shares.append(ExpenseShare(user_id=user_id, share_amount=amount))


def create_expense(trip: Trip, user_id: int, data: ExpenseCreate, db: Session) -> Expense:
    """Create an expense and, when shared, its member shares."""
    ensure_stage_in_trip(trip.id, data.stage_id, db)
    paid_by = data.paid_by_user_id or user_id
    ensure_member(trip, paid_by, db)

    expense = Expense(
        trip_id=trip.id,
        stage_id=data.stage_id,
        date=data.date or date.today(),
        category=data.category,
        description=data.description,
        amount=data.amount,
        currency=data.currency or trip.base_currency,
        paid_by_user_id=paid_by,
        is_shared=data.is_shared,
        note=data.note,
        created_by_user_id=user_id
    )
    db.add(expense)

    if data.is_shared:
        share_ids = resolve_share_user_ids(trip, data.shared_with_user_ids, db)
        for share_user_id, amount in split_amount(data.amount, share_ids, paid_by).items():
            expense.shares.append(ExpenseShare(user_id=share_user_id, share_amount=amount))

    db.commit()
    db.refresh(expense)

    logger.info(f"Created expense {expense.id} in trip {trip.id}")
    return expense


def update_expense(expense: Expense, trip: Trip, user_id: int, updates: dict, db: Session) -> Expense:
    """Apply a partial update and keep the shares consistent with it."""
    shared_with = updates.pop("shared_with_user_ids", None)

    if "stage_id" in updates:
        ensure_stage_in_trip(trip.id, updates["stage_id"], db)
    if updates.get("paid_by_user_id") is not None:
        ensure_member(trip, updates["paid_by_user_id"], db)

    previous_share_ids = [share.user_id for share in expense.shares]
    apply_updates(expense, updates, REQUIRED_FIELDS, user_id)

    reshare = shared_with is not None or any(
        field in updates for field in ("amount", "paid_by_user_id", "is_shared")
    )
    if reshare:
        if not expense.is_shared:
            share_ids = []
        elif shared_with is not None:
            share_ids = resolve_share_user_ids(trip, shared_with, db)
        else:
            share_ids = current_participants(trip, previous_share_ids, db)
        rebuild_shares(expense, share_ids, db)

    db.commit()
    db.refresh(expense)
    return expense


def to_expense_response(expense: Expense) -> ExpenseResponse:
    """Map an expense row and its shares to the response schema."""
    return ExpenseResponse(
        id=expense.id,
        trip_id=expense.trip_id,
        stage_id=expense.stage_id,
        date=expense.date,
        category=expense.category,
        description=expense.description,
        amount=expense.amount,
        currency=expense.currency,
        paid_by_user_id=expense.paid_by_user_id,
        is_shared=expense.is_shared,
        note=expense.note,
        shares=[
            ExpenseShareResponse(
                user_id=share.user_id,
                display_name=share.user.display_name,
                share_amount=share.share_amount
            )
            for share in expense.shares
        ],
        created_by_user_id=expense.created_by_user_id,
        updated_by_user_id=expense.updated_by_user_id,
        created_at=expense.created_at,
        updated_at=expense.updated_at,
        row_version=expense.row_version
    )


def summarize_expenses(trip: Trip, db: Session) -> ExpenseSummaryResponse:
    """Totals per category and currency. Currencies are never mixed."""
    rows = db.query(
        Expense.category,
        Expense.currency,
        func.sum(Expense.amount),
        func.count(Expense.id)
    ).filter(
        Expense.trip_id == trip.id
    ).group_by(
        Expense.category, Expense.currency
    ).order_by(
        Expense.category, Expense.currency
    ).all()

    by_category = []
    currency_totals: Dict[str, Decimal] = {}
    expense_count = 0
    for category, currency, total, count in rows:
        total = Decimal(total or 0).quantize(CENT)
        by_category.append(ExpenseCategoryTotal(
            category=category,
            currency=currency,
            total_amount=total,
            expense_count=count
        ))
        currency_totals[currency] = currency_totals.get(currency, Decimal(0)) + total
        expense_count += count

    return ExpenseSummaryResponse(
        trip_id=trip.id,
        base_currency=trip.base_currency,
        expense_count=expense_count,
        by_category=by_category,
        totals_by_currency=[
            CurrencyTotal(currency=currency, total_amount=total)
            for currency, total in sorted(currency_totals.items())
        ]
    )


def drop_member_shares(trip: Trip, user_id: int, db: Session) -> int:
    """Re-split the shared expenses a departed member took part in.

    The membership row must already be deleted and flushed.
    Returns the number of expenses re-split.
    """
    expenses = db.query(Expense).join(ExpenseShare).filter(
        Expense.trip_id == trip.id,
        ExpenseShare.user_id == user_id
    ).all()

    for expense in expenses:
        previous = [share.user_id for share in expense.shares if share.user_id != user_id]
        rebuild_shares(expense, current_participants(trip, previous, db), db)

    if expenses:
        logger.info(f"Re-split {len(expenses)} expenses of trip {trip.id} after user {user_id} left")
    return len(expenses)
