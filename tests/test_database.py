"""Tests for the completion counter store."""

import pytest

from tabata.database.db import (
    get_session, init_db, record_completion, times_completed,
)
from tabata.database.models import UserProgress, WorkoutRecord


class TestDatabase:

    def test_init_seeds_single_progress_row(self):
        init_db()  # second call must not add another row
        with get_session() as db:
            assert db.query(UserProgress).count() == 1

    def test_counter_starts_at_zero(self):
        assert times_completed() == 0

    def test_record_completion(self):
        assert record_completion(cycles=8, total_duration_ms=330_000) == 1
        assert record_completion(cycles=2, total_duration_ms=90_000) == 2
        assert times_completed() == 2
        with get_session() as db:
            cycles = [r.cycles for r in db.query(WorkoutRecord).order_by(WorkoutRecord.id)]
        assert cycles == [8, 2]

    def test_record_recreates_missing_progress_row(self):
        with get_session() as db:
            db.query(UserProgress).delete()
        assert record_completion(cycles=1, total_duration_ms=50_000) == 1

    def test_session_rolls_back_on_error(self):
        with pytest.raises(RuntimeError):
            with get_session() as db:
                db.add(WorkoutRecord(cycles=3, total_duration_ms=1))
                db.flush()
                raise RuntimeError("boom")
        with get_session() as db:
            assert db.query(WorkoutRecord).count() == 0
