"""Database connection, session management and the completion counter."""

import logging
from datetime import datetime
from pathlib import Path
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from .models import Base, UserProgress, WorkoutRecord

logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TabataTimer"
DB_PATH = APP_SUPPORT_DIR / "tabata.db"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _get_engine():
    global _engine
    if _engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        _engine = create_engine(
            f"sqlite:///{DB_PATH}",
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database instead of the real one on disk."""
    global _engine, _SessionFactory
    _SessionFactory = None
    _engine = create_engine(
        url,
        connect_args={"check_same_thread": False},
        echo=False,
    )


def init_db() -> None:
    """Create all tables and seed the progress row."""
    engine = _get_engine()
    Base.metadata.create_all(engine)

    factory = _get_session_factory()
    with factory() as session:
        if session.query(UserProgress).count() == 0:
            session.add(UserProgress())
            session.commit()
    logger.info("Database ready at %s", engine.url)


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def times_completed() -> int:
    """How many workouts have reached their finish cue."""
    with get_session() as db:
        progress = db.query(UserProgress).first()
        return progress.times_completed if progress else 0


def record_completion(cycles: int, total_duration_ms: int) -> int:
    """Store a finished workout and bump the counter.  Returns the new total."""
    with get_session() as db:
        progress = db.query(UserProgress).first()
        if progress is None:
            progress = UserProgress(times_completed=0)
            db.add(progress)
        progress.times_completed += 1
        db.add(WorkoutRecord(
            completed_at=datetime.now(),
            cycles=cycles,
            total_duration_ms=total_duration_ms,
        ))
        total = progress.times_completed
    logger.info("Workout completed (%d total)", total)
    return total
