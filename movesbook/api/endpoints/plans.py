from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from movesbook.db.async_session import get_async_db
from movesbook.models.user import User
from movesbook.models.workout_plan import DEFAULT_PLAN_TYPE, PlanType
from movesbook.schemas.workout_plan import (
    DayCreate,
    DayEnvelope,
    MoveframeCreate,
    MoveframeEnvelope,
    PlanCreate,
    PlanDeleteResponse,
    PlanEnvelope,
    PlanResetResponse,
    WorkoutCreate,
    WorkoutEnvelope,
)
from movesbook.services.async_auth import get_current_active_user_async
from movesbook.services.async_workout_plan import WorkoutPlanService
from movesbook.services.errors import NotFound

router = APIRouter()


@router.get("", response_model=PlanEnvelope)
async def get_plan(
    plan_type: PlanType = Query(DEFAULT_PLAN_TYPE, alias="type"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_active_user_async)
) -> Any:
    """
    Get the caller's plan of the given type with its full week/day/workout tree.
    An empty plan is created on first access.
    """
    plan = await WorkoutPlanService.get_or_create_plan(db, current_user.id, plan_type)
    return {"plan": plan}


@router.post("", response_model=PlanEnvelope)
async def create_plan(
    plan_data: PlanCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_active_user_async)
) -> Any:
    """Create a plan; 409 when the caller already has one of that type."""
    plan = await WorkoutPlanService.create_plan(
        db,
        current_user.id,
        name=plan_data.name,
        plan_type=plan_data.type,
        start_date=plan_data.start_date,
        number_of_weeks=plan_data.number_of_weeks,
    )
    return {"plan": plan}


@router.delete("", response_model=PlanDeleteResponse)
async def delete_plan(
    plan_type: PlanType = Query(DEFAULT_PLAN_TYPE, alias="type"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_active_user_async)
) -> Any:
    """
    Permanently delete the caller's plan of the given type together with
    all of its weeks, days, workouts, moveframes and movelaps.
    """
    plan_id = await WorkoutPlanService.delete_plan(db, current_user.id, plan_type)
    if plan_id is None:
        raise NotFound("No plan found", extra={"message": "No plan found"})

    return PlanDeleteResponse(message="Plan deleted successfully", deleted_plan_id=plan_id)


@router.delete("/reset", response_model=PlanResetResponse)
async def reset_plans(
    plan_type: Optional[PlanType] = Query(None, alias="type"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_active_user_async)
) -> Any:
    """Delete all of the caller's plans, or only those of one type."""
    count = await WorkoutPlanService.reset_plans(db, current_user.id, plan_type)
    scope = f"{plan_type.value} " if plan_type else ""
    return PlanResetResponse(
        message=f"Deleted {count} {scope}workout plan(s)",
        plans_deleted=count,
    )


@router.post("/days", response_model=DayEnvelope)
async def add_day(
    day_data: DayCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_active_user_async)
) -> Any:
    day = await WorkoutPlanService.add_day(
        db,
        current_user.id,
        plan_type=day_data.type,
        week_number=day_data.week_number,
        day_date=day_data.date,
        weather=day_data.weather,
        feeling_status=day_data.feeling_status,
        notes=day_data.notes,
    )
    return {"day": day}


@router.post("/workouts", response_model=WorkoutEnvelope)
async def add_workout(
    workout_data: WorkoutCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_active_user_async)
) -> Any:
    workout = await WorkoutPlanService.add_workout(
        db,
        current_user.id,
        day_id=workout_data.workout_day_id,
        session_number=workout_data.session_number,
        name=workout_data.name,
        code=workout_data.code,
        status=workout_data.status,
        duration_minutes=workout_data.duration_minutes,
        notes=workout_data.notes,
    )
    return {"workout": workout}


@router.post("/moveframes", response_model=MoveframeEnvelope)
async def add_moveframe(
    moveframe_data: MoveframeCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_active_user_async)
) -> Any:
    moveframe = await WorkoutPlanService.add_moveframe(
        db,
        current_user.id,
        workout_id=moveframe_data.workout_id,
        sport=moveframe_data.sport,
        description=moveframe_data.description,
        notes=moveframe_data.notes,
        movelaps=[lap.model_dump() for lap in moveframe_data.movelaps],
    )
    return {"moveframe": moveframe}
