"""
Trip service for trip and membership business logic.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload
from mototrip.models.trip import Trip, TripMember, TripMemberRole, ROLE_ORDER
from mototrip.schemas.trip import TripMemberResponse

logger = logging.getLogger(__name__)


def create_trip_with_owner(
    owner_id: int,
    name: str,
    start_date: date,
    end_date: Optional[date],
    base_currency: str,
    db: Session
) -> Trip:
    """Create a trip and register its creator as the Owner member."""
    trip = Trip(
        owner_user_id=owner_id,
        name=name,
        start_date=start_date,
        end_date=end_date,
        base_currency=base_currency.upper()
    )
    db.add(trip)
    db.flush()

    db.add(TripMember(
        trip_id=trip.id,
        user_id=owner_id,
        role=TripMemberRole.OWNER
    ))
    db.commit()
    db.refresh(trip)

    logger.info(f"Created trip {trip.id} for user {owner_id}")
    return trip


def get_member(trip_id: int, user_id: int, db: Session) -> Optional[TripMember]:
    return db.query(TripMember).filter(
        TripMember.trip_id == trip_id,
        TripMember.user_id == user_id
    ).first()


def get_member_role(trip: Trip, user_id: int, db: Session) -> Optional[TripMemberRole]:
    """Role of the user on the trip, or None for outsiders."""
    if trip.owner_user_id == user_id:
        return TripMemberRole.OWNER
    member = get_member(trip.id, user_id, db)
    return member.role if member else None


def list_members(trip_id: int, db: Session) -> List[TripMemberResponse]:
    """Members ordered by role (Owner, Editor, Viewer), then join time."""
    members = db.query(TripMember).options(
        joinedload(TripMember.user)
    ).filter(
        TripMember.trip_id == trip_id
    ).all()
    members.sort(key=lambda m: (ROLE_ORDER[m.role], m.joined_at, m.id))

    return [
        TripMemberResponse(
            user_id=m.user_id,
            display_name=m.user.display_name,
            email=m.user.email,
            role=m.role,
            joined_at=m.joined_at
        )
        for m in members
    ]
