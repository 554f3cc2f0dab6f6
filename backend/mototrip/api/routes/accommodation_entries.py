"""
Accommodation entry routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from mototrip.core.errors import ValidationError
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.accommodation_entry import AccommodationEntry
from mototrip.models.trip import WRITE_ROLES
from mototrip.schemas.accommodation_entry import (
    AccommodationEntryCreate, AccommodationEntryUpdate, AccommodationEntryResponse
)
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.entity_service import apply_updates, check_row_version, get_trip_child

router = APIRouter(prefix="/trips/{trip_id}/accommodations", tags=["accommodations"])

REQUIRED_FIELDS = (
    "name", "accommodation_type", "check_in_date", "check_out_date", "amount", "currency", "location"
)


@router.get("", response_model=List[AccommodationEntryResponse])
async def list_accommodation_entries(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List stays, latest check-in first."""
    check_trip_access(trip_id, current_user.id, db)

    return db.query(AccommodationEntry).filter(
        AccommodationEntry.trip_id == trip_id
    ).order_by(AccommodationEntry.check_in_date.desc(), AccommodationEntry.id.desc()).all()


@router.get("/{entry_id}", response_model=AccommodationEntryResponse)
async def get_accommodation_entry(
    trip_id: int,
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return get_trip_child(AccommodationEntry, trip_id, entry_id, db, "Accommodation entry")


@router.post("", response_model=AccommodationEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_accommodation_entry(
    trip_id: int,
    entry_data: AccommodationEntryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    trip = check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)

    values = entry_data.model_dump()
    values["currency"] = values["currency"] or trip.base_currency
    entry = AccommodationEntry(
        trip_id=trip_id,
        **values,
        created_by_user_id=current_user.id
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.put("/{entry_id}", response_model=AccommodationEntryResponse)
async def update_accommodation_entry(
    trip_id: int,
    entry_id: int,
    entry_data: AccommodationEntryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    entry = get_trip_child(AccommodationEntry, trip_id, entry_id, db, "Accommodation entry")

    updates = entry_data.model_dump(exclude_unset=True)
    check_row_version(entry, updates.pop("row_version", None))
    apply_updates(entry, updates, REQUIRED_FIELDS, current_user.id)
    if entry.check_out_date < entry.check_in_date:
        raise ValidationError("Check-out date must not be before check-in date")

    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_accommodation_entry(
    trip_id: int,
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    entry = get_trip_child(AccommodationEntry, trip_id, entry_id, db, "Accommodation entry")

    db.delete(entry)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
