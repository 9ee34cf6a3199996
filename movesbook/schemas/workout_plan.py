import datetime as dt
from typing import List, Optional

from pydantic import Field

from movesbook.models.workout_plan import DEFAULT_PLAN_TYPE, PlanStatus, PlanType
from movesbook.schemas.base import CamelSchema


# Movelaps and moveframes
class MovelapCreate(CamelSchema):
    """Schema for one lap of a moveframe; index is assigned by position."""
    distance: Optional[float] = Field(default=None, ge=0, description="Distance in meters")
    speed_code: Optional[str] = Field(default=None, max_length=10)
    time: Optional[str] = Field(default=None, max_length=20)
    pause: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None


class MovelapResponse(MovelapCreate):
    id: str
    index: int


class MoveframeCreate(CamelSchema):
    workout_id: str = Field(..., description="ID of the workout the moveframe belongs to")
    sport: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    notes: Optional[str] = None
    movelaps: List[MovelapCreate] = Field(default_factory=list)


class MoveframeResponse(CamelSchema):
    id: str
    code: str
    sport: str
    description: Optional[str] = None
    notes: Optional[str] = None
    movelaps: List[MovelapResponse] = []


# Workouts
class WorkoutCreate(CamelSchema):
    workout_day_id: str = Field(..., description="ID of the day the workout belongs to")
    session_number: int = Field(..., description="Session slot within the day (1-3)")
    name: Optional[str] = Field(default=None, max_length=255)
    code: Optional[str] = Field(default=None, max_length=50)
    status: Optional[str] = Field(default=None, max_length=50)
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class WorkoutResponse(CamelSchema):
    id: str
    session_number: int
    name: Optional[str] = None
    code: Optional[str] = None
    status: Optional[str] = None
    duration_minutes: Optional[int] = None
    notes: Optional[str] = None
    moveframes: List[MoveframeResponse] = []


# Days and weeks
class DayCreate(CamelSchema):
    type: PlanType = DEFAULT_PLAN_TYPE
    week_number: int = Field(..., ge=1)
    date: dt.date
    weather: Optional[str] = Field(default=None, max_length=100)
    feeling_status: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None


class DayResponse(CamelSchema):
    id: str
    date: dt.date
    weekday: int
    storage_zone: str
    weather: Optional[str] = None
    feeling_status: Optional[str] = None
    notes: Optional[str] = None
    workouts: List[WorkoutResponse] = []


class WeekResponse(CamelSchema):
    id: str
    week_number: int
    notes: Optional[str] = None
    days: List[DayResponse] = []


# Plans
class PlanCreate(CamelSchema):
    name: str = Field(..., min_length=1, max_length=255)
    type: PlanType = DEFAULT_PLAN_TYPE
    start_date: dt.date
    number_of_weeks: int = Field(..., ge=1, le=60)


class PlanResponse(CamelSchema):
    id: str
    user_id: str
    name: str
    type: PlanType
    status: PlanStatus
    start_date: dt.date
    end_date: Optional[dt.date] = None
    created_at: Optional[dt.datetime] = None
    weeks: List[WeekResponse] = []


class PlanEnvelope(CamelSchema):
    plan: PlanResponse


class DayEnvelope(CamelSchema):
    day: DayResponse


class WorkoutEnvelope(CamelSchema):
    workout: WorkoutResponse


class MoveframeEnvelope(CamelSchema):
    moveframe: MoveframeResponse


class PlanDeleteResponse(CamelSchema):
    message: str
    deleted_plan_id: str


class PlanResetResponse(CamelSchema):
    success: bool = True
    message: str
    plans_deleted: int
