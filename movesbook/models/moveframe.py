from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from movesbook.db.base_class import Base


class Moveframe(Base):
    __tablename__ = "moveframes"

    workout_id = Column(String(36), ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # 1-based, drives the letter code
    code = Column(String(10), nullable=False)  # A, B, ..., Z, AA, AB, ...
    sport = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    workout = relationship("WorkoutSession", back_populates="moveframes")
    movelaps = relationship(
        "Movelap",
        back_populates="moveframe",
        cascade="all, delete-orphan",
        order_by="Movelap.index",
    )

    __table_args__ = (
        UniqueConstraint("workout_id", "position", name="uq_moveframes_workout_position"),
    )


class Movelap(Base):
    __tablename__ = "movelaps"

    moveframe_id = Column(String(36), ForeignKey("moveframes.id", ondelete="CASCADE"), nullable=False, index=True)
    index = Column(Integer, nullable=False)
    distance = Column(Float, nullable=True)
    speed_code = Column(String(10), nullable=True)
    time = Column(String(20), nullable=True)
    pause = Column(String(20), nullable=True)
    notes = Column(Text, nullable=True)

    moveframe = relationship("Moveframe", back_populates="movelaps")
