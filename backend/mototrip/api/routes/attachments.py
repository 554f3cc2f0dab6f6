"""
Attachment metadata routes.

Files themselves live in blob storage; these routes only record where.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from mototrip.core.errors import ValidationError
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.attachment import Attachment
from mototrip.models.expense import Expense
from mototrip.models.item import Item
from mototrip.models.trip import WRITE_ROLES
from mototrip.schemas.attachment import AttachmentCreate, AttachmentResponse
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.entity_service import get_trip_child

router = APIRouter(prefix="/trips/{trip_id}/attachments", tags=["attachments"])


def _ensure_in_trip(model, trip_id: int, child_id: Optional[int], db: Session, label: str) -> None:
    if child_id is None:
        return
    exists = db.query(model.id).filter(model.id == child_id, model.trip_id == trip_id).first()
    if not exists:
        raise ValidationError(f"{label} {child_id} does not belong to this trip")


@router.get("", response_model=List[AttachmentResponse])
async def list_attachments(
    trip_id: int,
    item_id: Optional[int] = None,
    expense_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)

    query = db.query(Attachment).filter(Attachment.trip_id == trip_id)
    if item_id is not None:
        query = query.filter(Attachment.item_id == item_id)
    if expense_id is not None:
        query = query.filter(Attachment.expense_id == expense_id)
    return query.order_by(Attachment.id).all()


@router.get("/{attachment_id}", response_model=AttachmentResponse)
async def get_attachment(
    trip_id: int,
    attachment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return get_trip_child(Attachment, trip_id, attachment_id, db, "Attachment")


@router.post("", response_model=AttachmentResponse, status_code=status.HTTP_201_CREATED)
async def create_attachment(
    trip_id: int,
    attachment_data: AttachmentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Register an uploaded file against the trip, an item or an expense."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    _ensure_in_trip(Item, trip_id, attachment_data.item_id, db, "Item")
    _ensure_in_trip(Expense, trip_id, attachment_data.expense_id, db, "Expense")

    attachment = Attachment(
        trip_id=trip_id,
        **attachment_data.model_dump(),
        created_by_user_id=current_user.id
    )
    db.add(attachment)
    db.commit()
    db.refresh(attachment)
    return attachment


@router.delete("/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attachment(
    trip_id: int,
    attachment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    attachment = get_trip_child(Attachment, trip_id, attachment_id, db, "Attachment")

    db.delete(attachment)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
