"""
Pydantic schemas for Trip and TripMember entities.
"""
from pydantic import AfterValidator, BaseModel, EmailStr, Field, model_validator
from typing import List, Optional
from typing_extensions import Annotated
from datetime import date, datetime
from mototrip.models.trip import TripMemberRole
from mototrip.schemas.common import Currency


class TripCreate(BaseModel):
    """Schema for trip creation."""
    name: str = Field(min_length=1, max_length=200)
    start_date: date
    end_date: Optional[date] = None
    base_currency: Optional[Currency] = None  # Falls back to DEFAULT_CURRENCY

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class TripUpdate(BaseModel):
    """Schema for trip update. Only the submitted fields are changed."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    base_currency: Optional[Currency] = None


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: int
    owner_user_id: int
    name: str
    start_date: date
    end_date: Optional[date] = None
    base_currency: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripMemberResponse(BaseModel):
    """Schema for trip member response."""
    user_id: int
    display_name: str
    email: Optional[str] = None
    role: TripMemberRole
    joined_at: datetime


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with members."""
    members: List[TripMemberResponse] = []


def _check_assignable_role(role: TripMemberRole) -> TripMemberRole:
    if role == TripMemberRole.OWNER:
        raise ValueError("Owner role cannot be assigned")
    return role


AssignableRole = Annotated[TripMemberRole, AfterValidator(_check_assignable_role)]


class MemberAdd(BaseModel):
    """Schema for adding a member, by email or user id."""
    email: Optional[EmailStr] = None
    user_id: Optional[int] = None
    role: AssignableRole = TripMemberRole.VIEWER

    @model_validator(mode="after")
    def check_identity(self):
        if self.email is None and self.user_id is None:
            raise ValueError("Either email or user_id is required")
        return self


class MemberRoleUpdate(BaseModel):
    """Schema for changing a member's role."""
    role: AssignableRole
