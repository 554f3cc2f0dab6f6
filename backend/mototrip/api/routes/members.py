"""
Trip membership routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.trip import TripMember, TripMemberRole, WRITE_ROLES
from mototrip.schemas.trip import MemberAdd, MemberRoleUpdate, TripMemberResponse
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.expense_service import drop_member_shares
from mototrip.services.trip_service import get_member, list_members

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips/{trip_id}/members", tags=["members"])


def _get_member_or_404(trip_id: int, user_id: int, db: Session) -> TripMember:
    member = get_member(trip_id, user_id, db)
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )
    return member


@router.get("", response_model=List[TripMemberResponse])
async def get_members(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List trip members."""
    check_trip_access(trip_id, current_user.id, db)
    return list_members(trip_id, db)


@router.post("", response_model=List[TripMemberResponse], status_code=status.HTTP_201_CREATED)
async def add_member(
    trip_id: int,
    invite: MemberAdd,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a user to the trip as Editor or Viewer."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)

    query = db.query(User)
    if invite.user_id is not None:
        query = query.filter(User.id == invite.user_id)
    else:
        query = query.filter(func.lower(User.email) == invite.email.lower())
    user = query.first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    if get_member(trip_id, user.id, db):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is already a member"
        )

    db.add(TripMember(
        trip_id=trip_id,
        user_id=user.id,
        role=invite.role
    ))
    db.commit()

    logger.info(f"User {current_user.id} added user {user.id} to trip {trip_id} as {invite.role.value}")
    return list_members(trip_id, db)


@router.put("/{user_id}", response_model=List[TripMemberResponse])
async def update_member_role(
    trip_id: int,
    user_id: int,
    update: MemberRoleUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change a member's role."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)

    member = _get_member_or_404(trip_id, user_id, db)
    if member.role == TripMemberRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot change the trip owner's role"
        )

    member.role = update.role
    db.commit()

    logger.info(f"User {user_id} is now {update.role.value} on trip {trip_id}")
    return list_members(trip_id, db)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    trip_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a member from the trip."""
    trip = check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)

    member = _get_member_or_404(trip_id, user_id, db)
    if member.role == TripMemberRole.OWNER or user_id == trip.owner_user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove trip owner"
        )

    db.delete(member)
    db.flush()
    drop_member_shares(trip, user_id, db)
    db.commit()

    logger.info(f"Removed user {user_id} from trip {trip_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
