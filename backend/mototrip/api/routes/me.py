"""
Current user routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mototrip.db.session import get_db
from mototrip.schemas.user import UserResponse, UserUpdate
from mototrip.models.user import User
from mototrip.api.dependencies import get_current_user
from mototrip.services.entity_service import apply_updates

router = APIRouter(prefix="/me", tags=["me"])


@router.get("", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.put("", response_model=UserResponse)
async def update_me(
    profile: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update display name or email."""
    apply_updates(current_user, profile.model_dump(exclude_unset=True), required=("display_name",))
    db.commit()
    db.refresh(current_user)
    return current_user
