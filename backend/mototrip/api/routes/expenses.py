"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.expense import Expense, ExpenseShare
from mototrip.models.trip import WRITE_ROLES
from mototrip.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate, ExpenseSummaryResponse
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.entity_service import check_row_version, get_trip_child
from mototrip.services.expense_service import (
    create_expense, update_expense, to_expense_response, summarize_expenses
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips/{trip_id}/expenses", tags=["expenses"])


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: int,
    stage_id: Optional[int] = None,
    category: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List expenses of a trip, newest first."""
    check_trip_access(trip_id, current_user.id, db)

    query = db.query(Expense).options(
        selectinload(Expense.shares).joinedload(ExpenseShare.user)
    ).filter(Expense.trip_id == trip_id)
    if stage_id is not None:
        query = query.filter(Expense.stage_id == stage_id)
    if category is not None:
        query = query.filter(Expense.category == category)

    expenses = query.order_by(Expense.created_at.desc(), Expense.id.desc()).all()
    return [to_expense_response(expense) for expense in expenses]


@router.get("/summary", response_model=ExpenseSummaryResponse)
async def get_expense_summary(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Totals per category and currency."""
    trip = check_trip_access(trip_id, current_user.id, db)
    return summarize_expenses(trip, db)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    trip_id: int,
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    expense = get_trip_child(Expense, trip_id, expense_id, db, "Expense")
    return to_expense_response(expense)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    trip_id: int,
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a new expense."""
    trip = check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    expense = create_expense(trip, current_user.id, expense_data, db)
    return to_expense_response(expense)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def edit_expense(
    trip_id: int,
    expense_id: int,
    expense_data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the submitted expense fields."""
    trip = check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    expense = get_trip_child(Expense, trip_id, expense_id, db, "Expense")

    updates = expense_data.model_dump(exclude_unset=True)
    check_row_version(expense, updates.pop("row_version", None))
    expense = update_expense(expense, trip, current_user.id, updates, db)
    return to_expense_response(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    trip_id: int,
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    expense = get_trip_child(Expense, trip_id, expense_id, db, "Expense")

    db.delete(expense)
    db.commit()

    logger.info(f"Deleted expense {expense_id} from trip {trip_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
