import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movesbook.models.moveframe import Moveframe, Movelap
from movesbook.models.workout_day import WorkoutDay, WorkoutSession
from movesbook.models.workout_plan import DEFAULT_PLAN_TYPE, PlanStatus, PlanType, WorkoutPlan, WorkoutWeek
from movesbook.services.errors import NotFound, ValidationError, database_error
from movesbook.utils.logger import plan_logger

logger = logging.getLogger(__name__)

MAX_SESSIONS_PER_DAY = 3

# Storage zone of the days of each plan type; unlisted types land in zone B
STORAGE_ZONES = {
    PlanType.TEMPLATE_WEEKS: "A",
    PlanType.YEARLY_PLAN: "B",
    PlanType.WORKOUTS_DONE: "C",
    PlanType.ARCHIVE: "D",
}

# Name and length in days of a plan created implicitly
DEFAULT_PLAN_SHAPES = {
    PlanType.CURRENT_WEEKS: ("Current 3 Weeks", 21),
    PlanType.YEARLY_PLAN: ("Yearly Plan", 364),
}


def storage_zone_for(plan_type: PlanType) -> str:
    return STORAGE_ZONES.get(plan_type, "B")


def default_plan_shape(plan_type: PlanType) -> Tuple[str, int]:
    if plan_type in DEFAULT_PLAN_SHAPES:
        return DEFAULT_PLAN_SHAPES[plan_type]
    return plan_type.value.replace("_", " ").title(), 21


def moveframe_code(position: int) -> str:
    """Spreadsheet-style letter code: 1 -> A, 26 -> Z, 27 -> AA."""
    if position < 1:
        raise ValueError("position must be >= 1")
    code = ""
    while position > 0:
        position, remainder = divmod(position - 1, 26)
        code = chr(ord("A") + remainder) + code
    return code


def _plan_tree_options():
    return (
        selectinload(WorkoutPlan.weeks)
        .selectinload(WorkoutWeek.days)
        .selectinload(WorkoutDay.workouts)
        .selectinload(WorkoutSession.moveframes)
        .selectinload(Moveframe.movelaps),
    )


class WorkoutPlanService:
    """
    Async service for the workout plan lifecycle.

    A plan owns weeks, weeks own days, days own workouts (sessions), and
    workouts own moveframes and their movelaps. Every parent-to-child
    relationship cascades deletes, so removing a plan removes its whole
    tree in the same transaction.
    """

    @staticmethod
    async def find_active_plan(
        db: AsyncSession,
        user_id: str,
        plan_type: PlanType = DEFAULT_PLAN_TYPE,
        with_tree: bool = False
    ) -> Optional[WorkoutPlan]:
        """Return the user's plan of the given type, or None."""
        query = select(WorkoutPlan).where(
            and_(WorkoutPlan.user_id == user_id, WorkoutPlan.type == plan_type)
        )
        if with_tree:
            query = query.options(*_plan_tree_options()).execution_options(populate_existing=True)

        try:
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise database_error(e, "Failed to fetch workout plan")

    @staticmethod
    async def get_plan_tree(
        db: AsyncSession,
        user_id: str,
        plan_type: PlanType = DEFAULT_PLAN_TYPE
    ) -> Optional[WorkoutPlan]:
        """Get a plan with weeks, days, workouts, moveframes and movelaps loaded."""
        return await WorkoutPlanService.find_active_plan(db, user_id, plan_type, with_tree=True)

    @staticmethod
    async def _insert_plan(
        db: AsyncSession,
        user_id: str,
        plan_type: PlanType,
        name: str,
        start_date: date,
        end_date: Optional[date]
    ) -> WorkoutPlan:
        """Insert and commit a plan row; the (user, type) unique constraint decides races."""
        plan = WorkoutPlan(
            user_id=user_id,
            name=name,
            type=plan_type,
            status=PlanStatus.ACTIVE,
            start_date=start_date,
            end_date=end_date,
            weeks=[],
        )
        db.add(plan)
        await db.commit()
        plan_logger.success(f"Plan created: {plan.id}", context=plan_type.value, user_id=user_id)
        return plan

    @staticmethod
    async def _get_or_create_plan_row(db: AsyncSession, user_id: str, plan_type: PlanType) -> WorkoutPlan:
        plan = await WorkoutPlanService.find_active_plan(db, user_id, plan_type)
        if plan is not None:
            return plan

        name, length_days = default_plan_shape(plan_type)
        start_date = date.today()
        try:
            return await WorkoutPlanService._insert_plan(
                db, user_id, plan_type, name, start_date, start_date + timedelta(days=length_days)
            )
        except IntegrityError as e:
            # A concurrent request created it first
            await db.rollback()
            plan = await WorkoutPlanService.find_active_plan(db, user_id, plan_type)
            if plan is None:
                raise database_error(e, "Failed to create workout plan")
            return plan
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(e, "Failed to create workout plan")

    @staticmethod
    async def get_or_create_plan(
        db: AsyncSession,
        user_id: str,
        plan_type: PlanType = DEFAULT_PLAN_TYPE
    ) -> WorkoutPlan:
        """Return the plan tree, creating an empty default plan on first access."""
        await WorkoutPlanService._get_or_create_plan_row(db, user_id, plan_type)
        return await WorkoutPlanService.get_plan_tree(db, user_id, plan_type)

    @staticmethod
    async def create_plan(
        db: AsyncSession,
        user_id: str,
        name: str,
        plan_type: PlanType,
        start_date: date,
        number_of_weeks: int
    ) -> WorkoutPlan:
        """Create a plan spanning the given number of weeks. Raises Conflict if one of that type exists."""
        end_date = start_date + timedelta(days=number_of_weeks * 7)
        try:
            await WorkoutPlanService._insert_plan(db, user_id, plan_type, name, start_date, end_date)
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(
                e,
                "Failed to create workout plan",
                conflict_message=f"A {plan_type.value} plan already exists",
            )
        return await WorkoutPlanService.get_plan_tree(db, user_id, plan_type)

    @staticmethod
    async def add_day(
        db: AsyncSession,
        user_id: str,
        plan_type: PlanType,
        week_number: int,
        day_date: date,
        weather: Optional[str] = None,
        feeling_status: Optional[str] = None,
        notes: Optional[str] = None
    ) -> WorkoutDay:
        """
        Add a day to the given week of the user's plan.

        The plan and the week are created when missing: adding a day is
        the first workout-building action on a plan.
        """
        if week_number < 1:
            raise ValidationError("Week number must be at least 1")

        plan = await WorkoutPlanService._get_or_create_plan_row(db, user_id, plan_type)

        try:
            result = await db.execute(
                select(WorkoutWeek).where(
                    and_(WorkoutWeek.plan_id == plan.id, WorkoutWeek.week_number == week_number)
                )
            )
            week = result.scalar_one_or_none()
            if week is None:
                week = WorkoutWeek(plan_id=plan.id, week_number=week_number)
                db.add(week)
                await db.flush()
                logger.debug(f"Created week {week_number} for plan {plan.id}")

            day = WorkoutDay(
                week_id=week.id,
                date=day_date,
                weekday=day_date.isoweekday(),
                storage_zone=storage_zone_for(plan_type),
                weather=weather,
                feeling_status=feeling_status,
                notes=notes,
            )
            db.add(day)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(e, "Failed to create workout day")

        plan_logger.info(f"Day added: {day.id}", context=plan_type.value, week=week_number, date=day_date)
        return await WorkoutPlanService._load_day(db, day.id)

    @staticmethod
    async def _load_day(db: AsyncSession, day_id: str) -> WorkoutDay:
        result = await db.execute(
            select(WorkoutDay)
            .options(
                selectinload(WorkoutDay.workouts)
                .selectinload(WorkoutSession.moveframes)
                .selectinload(Moveframe.movelaps)
            )
            .where(WorkoutDay.id == day_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @staticmethod
    async def _get_owned_day(db: AsyncSession, user_id: str, day_id: str) -> WorkoutDay:
        """Fetch a day only through its owning plan; days of other users are reported as missing."""
        result = await db.execute(
            select(WorkoutDay)
            .join(WorkoutWeek, WorkoutDay.week_id == WorkoutWeek.id)
            .join(WorkoutPlan, WorkoutWeek.plan_id == WorkoutPlan.id)
            .where(and_(WorkoutDay.id == day_id, WorkoutPlan.user_id == user_id))
        )
        day = result.scalar_one_or_none()
        if day is None:
            raise NotFound("Workout day not found")
        return day

    @staticmethod
    async def _get_owned_workout(db: AsyncSession, user_id: str, workout_id: str) -> WorkoutSession:
        result = await db.execute(
            select(WorkoutSession)
            .join(WorkoutDay, WorkoutSession.day_id == WorkoutDay.id)
            .join(WorkoutWeek, WorkoutDay.week_id == WorkoutWeek.id)
            .join(WorkoutPlan, WorkoutWeek.plan_id == WorkoutPlan.id)
            .where(and_(WorkoutSession.id == workout_id, WorkoutPlan.user_id == user_id))
        )
        workout = result.scalar_one_or_none()
        if workout is None:
            raise NotFound("Workout not found")
        return workout

    @staticmethod
    async def add_workout(
        db: AsyncSession,
        user_id: str,
        day_id: str,
        session_number: int,
        name: Optional[str] = None,
        code: Optional[str] = None,
        status: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        notes: Optional[str] = None
    ) -> WorkoutSession:
        """Add a workout session (1-3) to a day of one of the user's plans."""
        try:
            day = await WorkoutPlanService._get_owned_day(db, user_id, day_id)

            if not 1 <= session_number <= MAX_SESSIONS_PER_DAY:
                raise ValidationError(f"Session number must be between 1 and {MAX_SESSIONS_PER_DAY}")

            result = await db.execute(
                select(WorkoutSession.session_number).where(WorkoutSession.day_id == day.id)
            )
            used_numbers = set(result.scalars().all())

            if session_number in used_numbers:
                raise ValidationError("Session number already exists for this day")
            if len(used_numbers) >= MAX_SESSIONS_PER_DAY:
                raise ValidationError(f"Maximum {MAX_SESSIONS_PER_DAY} workout sessions per day")

            workout = WorkoutSession(
                day_id=day.id,
                session_number=session_number,
                name=name or f"Workout {session_number}",
                code=code or "",
                status=status,
                duration_minutes=duration_minutes,
                notes=notes,
            )
            db.add(workout)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(
                e,
                "Failed to create workout",
                conflict_message="Session number already exists for this day",
            )

        plan_logger.info(f"Workout added: {workout.id}", context="WORKOUTS", day_id=day_id, session=session_number)
        return await WorkoutPlanService._load_workout(db, workout.id)

    @staticmethod
    async def _load_workout(db: AsyncSession, workout_id: str) -> WorkoutSession:
        result = await db.execute(
            select(WorkoutSession)
            .options(selectinload(WorkoutSession.moveframes).selectinload(Moveframe.movelaps))
            .where(WorkoutSession.id == workout_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @staticmethod
    async def add_moveframe(
        db: AsyncSession,
        user_id: str,
        workout_id: str,
        sport: str,
        description: Optional[str] = None,
        notes: Optional[str] = None,
        movelaps: Optional[List[Dict[str, Any]]] = None
    ) -> Moveframe:
        """Append a moveframe, with its movelaps numbered 1..n, to one of the user's workouts."""
        try:
            workout = await WorkoutPlanService._get_owned_workout(db, user_id, workout_id)

            result = await db.execute(
                select(func.max(Moveframe.position)).where(Moveframe.workout_id == workout.id)
            )
            position = (result.scalar() or 0) + 1

            moveframe = Moveframe(
                workout_id=workout.id,
                position=position,
                code=moveframe_code(position),
                sport=sport,
                description=description,
                notes=notes,
                movelaps=[
                    Movelap(index=index, **lap)
                    for index, lap in enumerate(movelaps or [], start=1)
                ],
            )
            db.add(moveframe)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(e, "Failed to create moveframe", conflict_message="Moveframe position already taken")

        result = await db.execute(
            select(Moveframe)
            .options(selectinload(Moveframe.movelaps))
            .where(Moveframe.id == moveframe.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @staticmethod
    async def delete_plan(
        db: AsyncSession,
        user_id: str,
        plan_type: PlanType = DEFAULT_PLAN_TYPE
    ) -> Optional[str]:
        """
        Permanently delete the user's plan of the given type with everything it owns.

        The plan row and all its weeks, days, workouts, moveframes and
        movelaps are removed in a single transaction; on failure the
        transaction is rolled back and nothing is removed.

        Returns:
            The deleted plan's id, or None when the user has no such plan.
        """
        plan = await WorkoutPlanService.find_active_plan(db, user_id, plan_type, with_tree=True)
        if plan is None:
            logger.info(f"No {plan_type.value} plan to delete for user {user_id}")
            return None

        plan_id = plan.id
        try:
            await db.delete(plan)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(e, "Failed to delete workout plan")

        plan_logger.success(f"Plan deleted: {plan_id}", context=plan_type.value, user_id=user_id)
        return plan_id

    @staticmethod
    async def reset_plans(
        db: AsyncSession,
        user_id: str,
        plan_type: Optional[PlanType] = None
    ) -> int:
        """Delete all of the user's plans (or those of one type) in one transaction. Returns the count."""
        query = select(WorkoutPlan).options(*_plan_tree_options()).where(WorkoutPlan.user_id == user_id)
        if plan_type is not None:
            query = query.where(WorkoutPlan.type == plan_type)

        try:
            result = await db.execute(query.execution_options(populate_existing=True))
            plans = result.scalars().all()
            for plan in plans:
                await db.delete(plan)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise database_error(e, "Failed to reset workout plans")

        plan_logger.success(
            f"Deleted {len(plans)} workout plan(s)",
            context=plan_type.value if plan_type else "ALL",
            user_id=user_id,
        )
        return len(plans)
