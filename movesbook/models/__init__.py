"""Database models."""

# Import all models here to ensure they're recognized by SQLAlchemy
from movesbook.models.defaults import DEFAULTS_MODELS, ColorDefaults, DefaultsKind, FavouritesDefaults, ToolsDefaults
from movesbook.models.moveframe import Moveframe, Movelap
from movesbook.models.user import User, UserRole
from movesbook.models.workout_day import WorkoutDay, WorkoutSession
from movesbook.models.workout_plan import DEFAULT_PLAN_TYPE, PlanStatus, PlanType, WorkoutPlan, WorkoutWeek

__all__ = [
    "User",
    "UserRole",
    "WorkoutPlan",
    "WorkoutWeek",
    "WorkoutDay",
    "WorkoutSession",
    "Moveframe",
    "Movelap",
    "PlanType",
    "PlanStatus",
    "DEFAULT_PLAN_TYPE",
    "ColorDefaults",
    "FavouritesDefaults",
    "ToolsDefaults",
    "DefaultsKind",
    "DEFAULTS_MODELS",
]
