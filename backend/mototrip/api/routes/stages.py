"""
Stage management routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from mototrip.db.session import get_db
from mototrip.models.user import User
from mototrip.models.stage import Stage
from mototrip.models.trip import WRITE_ROLES
from mototrip.schemas.stage import StageCreate, StageUpdate, StageResponse
from mototrip.api.dependencies import get_current_user
from mototrip.api.routes.trips import check_trip_access
from mototrip.services.entity_service import apply_updates, check_row_version, get_trip_child

router = APIRouter(prefix="/trips/{trip_id}/stages", tags=["stages"])

REQUIRED_FIELDS = ("date", "start_text", "end_text")


@router.get("", response_model=List[StageResponse])
async def list_stages(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List stages of a trip in date order."""
    check_trip_access(trip_id, current_user.id, db)

    return db.query(Stage).filter(
        Stage.trip_id == trip_id
    ).order_by(Stage.date, Stage.id).all()


@router.get("/{stage_id}", response_model=StageResponse)
async def get_stage(
    trip_id: int,
    stage_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user.id, db)
    return get_trip_child(Stage, trip_id, stage_id, db, "Stage")


@router.post("", response_model=StageResponse, status_code=status.HTTP_201_CREATED)
async def create_stage(
    trip_id: int,
    stage_data: StageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a stage to the trip."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)

    stage = Stage(
        trip_id=trip_id,
        **stage_data.model_dump(),
        created_by_user_id=current_user.id
    )
    db.add(stage)
    db.commit()
    db.refresh(stage)
    return stage


@router.put("/{stage_id}", response_model=StageResponse)
async def update_stage(
    trip_id: int,
    stage_id: int,
    stage_data: StageUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the submitted stage fields."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    stage = get_trip_child(Stage, trip_id, stage_id, db, "Stage")

    updates = stage_data.model_dump(exclude_unset=True)
    check_row_version(stage, updates.pop("row_version", None))
    apply_updates(stage, updates, REQUIRED_FIELDS, current_user.id)

    db.commit()
    db.refresh(stage)
    return stage


@router.delete("/{stage_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stage(
    trip_id: int,
    stage_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a stage. Its items and expenses are kept, unlinked."""
    check_trip_access(trip_id, current_user.id, db, roles=WRITE_ROLES)
    stage = get_trip_child(Stage, trip_id, stage_id, db, "Stage")

    db.delete(stage)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
