"""
Fuel entry routes.
"""
from decimal import Decimal
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.fuel_entry import FuelEntry
from mototrip.models.trip import WRITE_ROLES
from mototrip.schemas.fuel_entry import FuelEntryCreate, FuelEntryUpdate, FuelEntryResponse
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.entity_service import apply_updates, check_row_version, get_trip_child

router = APIRouter(prefix="/trips/{trip_id}/fuel-entries", tags=["fuel-entries"])

REQUIRED_FIELDS = ("date", "quantity", "amount", "currency", "mileage", "location")


def compute_unit_price(amount: Decimal, quantity: Decimal) -> Decimal:
    """Price per unit of fuel, to three decimals."""
    if not quantity or quantity <= 0:
        return Decimal("0.000")
    return (amount / quantity).quantize(Decimal("0.001"))


@router.get("", response_model=List[FuelEntryResponse])
async def list_fuel_entries(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List fuel entries, most recent first."""
    check_trip_access(trip_id, current_user.id, db)

    return db.query(FuelEntry).filter(
        FuelEntry.trip_id == trip_id
    ).order_by(FuelEntry.date.desc(), FuelEntry.mileage.desc(), FuelEntry.id.desc()).all()


@router.get("/{entry_id}", response_model=FuelEntryResponse)
async def get_fuel_entry(
    trip_id: int,
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return get_trip_child(FuelEntry, trip_id, entry_id, db, "Fuel entry")


@router.post("", response_model=FuelEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_fuel_entry(
    trip_id: int,
    entry_data: FuelEntryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    trip = check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)

    entry = FuelEntry(
        trip_id=trip_id,
        date=entry_data.date,
        quantity=entry_data.quantity,
        amount=entry_data.amount,
        currency=entry_data.currency or trip.base_currency,
        unit_price=compute_unit_price(entry_data.amount, entry_data.quantity),
        mileage=entry_data.mileage,
        location=entry_data.location,
        note=entry_data.note,
        created_by_user_id=current_user.id
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.put("/{entry_id}", response_model=FuelEntryResponse)
async def update_fuel_entry(
    trip_id: int,
    entry_id: int,
    entry_data: FuelEntryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    entry = get_trip_child(FuelEntry, trip_id, entry_id, db, "Fuel entry")

    updates = entry_data.model_dump(exclude_unset=True)
    check_row_version(entry, updates.pop("row_version", None))
    apply_updates(entry, updates, REQUIRED_FIELDS, current_user.id)
    entry.unit_price = compute_unit_price(Decimal(entry.amount), Decimal(entry.quantity))

    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fuel_entry(
    trip_id: int,
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    entry = get_trip_child(FuelEntry, trip_id, entry_id, db, "Fuel entry")

    db.delete(entry)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
