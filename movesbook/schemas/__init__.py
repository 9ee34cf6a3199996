"""Pydantic schemas for request and response validation."""

# Auth schemas
from .auth import LoginResponse, TokenPayload, UserLogin

# Defaults schemas
from .defaults import (
    AllDefaultsResponse,
    DefaultsLoadResponse,
    DefaultsSaveRequest,
    DefaultsSaveResponse,
)

# Workout plan schemas
from .workout_plan import (
    DayCreate,
    DayEnvelope,
    DayResponse,
    MoveframeCreate,
    MoveframeEnvelope,
    MoveframeResponse,
    MovelapCreate,
    MovelapResponse,
    PlanCreate,
    PlanDeleteResponse,
    PlanEnvelope,
    PlanResetResponse,
    PlanResponse,
    WeekResponse,
    WorkoutCreate,
    WorkoutEnvelope,
    WorkoutResponse,
)

__all__ = [
    # Auth schemas
    "UserLogin",
    "LoginResponse",
    "TokenPayload",
    # Defaults schemas
    "DefaultsSaveRequest",
    "DefaultsLoadResponse",
    "DefaultsSaveResponse",
    "AllDefaultsResponse",
    # Workout plan schemas
    "PlanCreate",
    "PlanResponse",
    "PlanEnvelope",
    "PlanDeleteResponse",
    "PlanResetResponse",
    "WeekResponse",
    "DayCreate",
    "DayResponse",
    "DayEnvelope",
    "WorkoutCreate",
    "WorkoutResponse",
    "WorkoutEnvelope",
    "MoveframeCreate",
    "MoveframeResponse",
    "MoveframeEnvelope",
    "MovelapCreate",
    "MovelapResponse",
]
