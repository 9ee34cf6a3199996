from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from movesbook.db.base_class import Base


class WorkoutDay(Base):
    __tablename__ = "workout_days"

    week_id = Column(String(36), ForeignKey("workout_weeks.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    weekday = Column(Integer, nullable=False)  # 1-7, Monday = 1
    storage_zone = Column(String(1), nullable=False, default="B")  # A-D
    weather = Column(String(100), nullable=True)
    feeling_status = Column(String(20), nullable=True)
    notes = Column(Text, nullable=True)

    week = relationship("WorkoutWeek", back_populates="days")
    workouts = relationship(
        "WorkoutSession",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="WorkoutSession.session_number",
    )

    __table_args__ = (
        CheckConstraint("weekday BETWEEN 1 AND 7", name="check_weekday_range"),
    )


class WorkoutSession(Base):
    """A single workout within a day; a day holds up to three."""

    __tablename__ = "workout_sessions"

    day_id = Column(String(36), ForeignKey("workout_days.id", ondelete="CASCADE"), nullable=False, index=True)
    session_number = Column(Integer, nullable=False)
    name = Column(String(255), nullable=True)
    code = Column(String(50), nullable=True)
    status = Column(String(50), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    day = relationship("WorkoutDay", back_populates="workouts")
    moveframes = relationship(
        "Moveframe",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Moveframe.position",
    )

    __table_args__ = (
        UniqueConstraint("day_id", "session_number", name="uq_workout_sessions_day_session_number"),
        CheckConstraint("session_number BETWEEN 1 AND 3", name="check_session_number_range"),
    )
