"""
Trip management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import Iterable, List, Optional
from mototrip.core.config import settings
from mototrip.core.errors import TripAccessDeniedError, ValidationError
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.trip import Trip, TripMember, TripMemberRole
from mototrip.schemas.trip import TripCreate, TripUpdate, TripResponse, TripDetailResponse
from mototrip.api.dependencies import get_current_user
from mototrip.services.entity_service import apply_updates
from mototrip.services.trip_service import create_trip_with_owner, get_member_role, list_members

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


def check_trip_access(
    trip_id: int,
    user_id: int,
    db: Session,
    roles: Optional[Iterable[TripMemberRole]] = None
) -> Trip:
    """Check if user has access to trip, optionally with one of `roles`."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )

    role = get_member_role(trip, user_id, db)
    if role is None:
        raise TripAccessDeniedError(trip_id, user_id)
    if roles is not None and role not in roles:
        raise TripAccessDeniedError(
            trip_id, user_id,
            f"Role '{role.value}' is not allowed to perform this action on trip '{trip_id}'"
        )

    return trip


def _trip_detail(trip: Trip, db: Session) -> TripDetailResponse:
    return TripDetailResponse(
        **TripResponse.model_validate(trip).model_dump(),
        members=list_members(trip.id, db)
    )


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip. The creator becomes its owner."""
    return create_trip_with_owner(
        owner_id=current_user.id,
        name=trip_data.name,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        base_currency=trip_data.base_currency or settings.DEFAULT_CURRENCY,
        db=db
    )


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all trips for current user."""
    trips = db.query(Trip).join(TripMember).filter(
        TripMember.user_id == current_user.id
    ).order_by(Trip.start_date.desc(), Trip.id.desc()).all()
    return trips


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details with members."""
    trip = check_trip_access(trip_id, current_user.id, db)
    return _trip_detail(trip, db)


@router.put("/{trip_id}", response_model=TripDetailResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the submitted trip fields."""
    trip = check_trip_access(trip_id, current_user.id, db, roles=[TripMemberRole.OWNER])

    updates = trip_data.model_dump(exclude_unset=True)
    apply_updates(trip, updates, required=("name", "start_date", "base_currency"))
    if trip.end_date is not None and trip.end_date < trip.start_date:
        raise ValidationError("End date must be after start date")

    db.commit()
    db.refresh(trip)
    return _trip_detail(trip, db)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and everything it owns."""
    trip = check_trip_access(trip_id, current_user.id, db, roles=[TripMemberRole.OWNER])

    db.delete(trip)
    db.commit()

    logger.info(f"Deleted trip {trip_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
