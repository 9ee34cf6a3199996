import enum

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, String, Text, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from movesbook.db.base_class import Base


class PlanType(str, enum.Enum):
    CURRENT_WEEKS = "CURRENT_WEEKS"
    YEARLY_PLAN = "YEARLY_PLAN"
    WORKOUTS_DONE = "WORKOUTS_DONE"
    ARCHIVE = "ARCHIVE"
    TEMPLATE_WEEKS = "TEMPLATE_WEEKS"


DEFAULT_PLAN_TYPE = PlanType.CURRENT_WEEKS


class PlanStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"


class WorkoutPlan(Base):
    """A user's workout schedule for one plan type. At most one per (user, type)."""

    __tablename__ = "workout_plans"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(Enum(PlanType, name="plan_type", native_enum=False, length=32), nullable=False)
    status = Column(Enum(PlanStatus, name="plan_status", native_enum=False, length=16), nullable=False, default=PlanStatus.ACTIVE)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    user = relationship("User", back_populates="workout_plans")
    weeks = relationship(
        "WorkoutWeek",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="WorkoutWeek.week_number",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "type", name="uq_workout_plans_user_type"),
    )


class WorkoutWeek(Base):
    __tablename__ = "workout_weeks"

    plan_id = Column(String(36), ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    week_number = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)

    plan = relationship("WorkoutPlan", back_populates="weeks")
    days = relationship(
        "WorkoutDay",
        back_populates="week",
        cascade="all, delete-orphan",
        order_by="WorkoutDay.date",
    )

    __table_args__ = (
        UniqueConstraint("plan_id", "week_number", name="uq_workout_weeks_plan_week_number"),
        CheckConstraint("week_number >= 1", name="check_week_number_positive"),
    )
