"""
Item management routes.
"""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.item import Item, ItemType
from mototrip.models.trip import WRITE_ROLES
from mototrip.schemas.item import ItemCreate, ItemUpdate, ItemResponse
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.entity_service import (
    apply_updates, check_row_version, ensure_stage_in_trip, get_trip_child
)

router = APIRouter(prefix="/trips/{trip_id}/items", tags=["items"])

REQUIRED_FIELDS = ("type", "title")


@router.get("", response_model=List[ItemResponse])
async def list_items(
    trip_id: int,
    stage_id: Optional[int] = None,
    item_type: Optional[ItemType] = Query(default=None, alias="type"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List items of a trip, optionally of one stage or type."""
    check_trip_access(trip_id, current_user.id, db)

    query = db.query(Item).filter(Item.trip_id == trip_id)
    if stage_id is not None:
        query = query.filter(Item.stage_id == stage_id)
    if item_type is not None:
        query = query.filter(Item.type == item_type)
    return query.order_by(Item.id).all()


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    trip_id: int,
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return get_trip_child(Item, trip_id, item_id, db, "Item")


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    trip_id: int,
    item_data: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an item to the trip."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    ensure_stage_in_trip(trip_id, item_data.stage_id, db)

    item = Item(
        trip_id=trip_id,
        **item_data.model_dump(),
        created_by_user_id=current_user.id
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    trip_id: int,
    item_id: int,
    item_data: ItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the submitted item fields."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    item = get_trip_child(Item, trip_id, item_id, db, "Item")

    updates = item_data.model_dump(exclude_unset=True)
    check_row_version(item, updates.pop("row_version", None))
    if "stage_id" in updates:
        ensure_stage_in_trip(trip_id, updates["stage_id"], db)
    apply_updates(item, updates, REQUIRED_FIELDS, current_user.id)

    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    trip_id: int,
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    item = get_trip_child(Item, trip_id, item_id, db, "Item")

    db.delete(item)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
