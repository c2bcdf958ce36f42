"""SQLAlchemy ORM models for the Tabata timer."""

from datetime import datetime
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class WorkoutRecord(Base):
    """One workout that reached its ``finish`` cue."""

    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    completed_at = Column(DateTime, nullable=False, default=datetime.now)
    cycles = Column(Integer, nullable=False, default=0)
    total_duration_ms = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<WorkoutRecord id={self.id} cycles={self.cycles} "
            f"at={self.completed_at}>"
        )


class UserProgress(Base):
    """Single-row table holding the times-completed counter."""

    __tablename__ = "user_progress"

    id = Column(Integer, primary_key=True, autoincrement=True)
    times_completed = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<UserProgress completed={self.times_completed}>"
