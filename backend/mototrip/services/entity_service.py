"""
Helpers shared by the trip-scoped resource routes.
"""
from typing import Iterable, Optional

from sqlalchemy.orm import Session
from mototrip.core.errors import ConcurrencyConflictError, NotFoundError, ValidationError
from mototrip.models.stage import Stage


def get_trip_child(model, trip_id: int, child_id: int, db: Session, label: str):
    """Load a row of `model` that belongs to the trip.

    Rows of other trips are reported as missing.
    """
    obj = db.query(model).filter(
        model.id == child_id,
        model.trip_id == trip_id
    ).first()
    if not obj:
        raise NotFoundError(f"{label} not found")
    return obj


def ensure_stage_in_trip(trip_id: int, stage_id: Optional[int], db: Session) -> None:
    if stage_id is None:
        return
    exists = db.query(Stage.id).filter(
        Stage.id == stage_id,
        Stage.trip_id == trip_id
    ).first()
    if not exists:
        raise ValidationError(f"Stage {stage_id} does not belong to this trip")


def check_row_version(entity, row_version: Optional[int]) -> None:
    """Reject updates made against an outdated copy of the row."""
    if row_version is not None and row_version != entity.row_version:
        raise ConcurrencyConflictError()


def apply_updates(entity, updates: dict, required: Iterable[str], user_id: Optional[int] = None) -> None:
    """Copy submitted fields onto the entity.

    `updates` must only hold the fields present in the request body.
    Nulls are refused for columns listed in `required`.
    """
    required = set(required)
    for field, value in updates.items():
        if value is None and field in required:
            raise ValidationError(f"Field '{field}' cannot be null")
    for field, value in updates.items():
        setattr(entity, field, value)
    if user_id is not None:
        entity.updated_by_user_id = user_id
