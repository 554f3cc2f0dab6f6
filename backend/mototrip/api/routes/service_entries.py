"""
Service entry routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.service_entry import ServiceEntry
from mototrip.models.trip import WRITE_ROLES
from mototrip.schemas.service_entry import ServiceEntryCreate, ServiceEntryUpdate, ServiceEntryResponse
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.entity_service import apply_updates, check_row_version, get_trip_child

router = APIRouter(prefix="/trips/{trip_id}/service-entries", tags=["service-entries"])

REQUIRED_FIELDS = ("service_type", "description", "service_date", "amount", "currency", "location")


@router.get("", response_model=List[ServiceEntryResponse])
async def list_service_entries(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List service entries, most recent first."""
    check_trip_access(trip_id, current_user.id, db)

    return db.query(ServiceEntry).filter(
        ServiceEntry.trip_id == trip_id
    ).order_by(ServiceEntry.service_date.desc(), ServiceEntry.id.desc()).all()


@router.get("/{entry_id}", response_model=ServiceEntryResponse)
async def get_service_entry(
    trip_id: int,
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return get_trip_child(ServiceEntry, trip_id, entry_id, db, "Service entry")


@router.post("", response_model=ServiceEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_service_entry(
    trip_id: int,
    entry_data: ServiceEntryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    trip = check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)

    values = entry_data.model_dump()
    values["currency"] = values["currency"] or trip.base_currency
    entry = ServiceEntry(
        trip_id=trip_id,
        **values,
        created_by_user_id=current_user.id
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.put("/{entry_id}", response_model=ServiceEntryResponse)
async def update_service_entry(
    trip_id: int,
    entry_id: int,
    entry_data: ServiceEntryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    entry = get_trip_child(ServiceEntry, trip_id, entry_id, db, "Service entry")

    updates = entry_data.model_dump(exclude_unset=True)
    check_row_version(entry, updates.pop("row_version", None))
    apply_updates(entry, updates, REQUIRED_FIELDS, current_user.id)

    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service_entry(
    trip_id: int,
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    entry = get_trip_child(ServiceEntry, trip_id, entry_id, db, "Service entry")

    db.delete(entry)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
