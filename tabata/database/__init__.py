"""Database package."""

from .db import get_session, init_db, record_completion, times_completed
from .models import UserProgress, WorkoutRecord

__all__ = [
    "get_session",
    "init_db",
    "record_completion",
    "times_completed",
    "UserProgress",
    "WorkoutRecord",
]
