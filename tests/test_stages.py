"""Tests for the stage sequence builder."""

import dataclasses

import pytest

from tabata.timer.stages import (
    Stage, build_stages,
    DEFAULT_CYCLES, DEFAULT_STAGES,
    PREPARE, WORK, REST, FINISH,
)


class TestBuildStages:

    def test_single_cycle(self):
        assert build_stages(1) == (
            Stage(PREPARE, 10_000),
            Stage(WORK, 30_000),
            Stage(FINISH, 10_000),
        )

    @pytest.mark.parametrize("cycles", [1, 2, 3, 8, 20])
    def test_length_is_two_per_cycle_plus_finish(self, cycles):
        assert len(build_stages(cycles)) == 2 * cycles + 1

    def test_default_is_eight_cycles(self):
        assert DEFAULT_CYCLES == 8
        assert len(build_stages()) == 17
        assert DEFAULT_STAGES == build_stages(8)

    def test_name_pattern(self):
        stages = build_stages(4)
        names = [s.name for s in stages]
        assert names[0] == PREPARE
        assert names[-1] == FINISH
        assert names[1:-1:2] == [WORK] * 4
        assert names[2:-1:2] == [REST] * 3

    def test_default_durations(self):
        for stage in build_stages(3):
            expected = 30_000 if stage.name == WORK else 10_000
            assert stage.duration_ms == expected

    def test_custom_durations(self):
        stages = build_stages(
            2, prepare_ms=5_000, work_ms=20_000, rest_ms=8_000, finish_ms=0,
        )
        assert [s.duration_ms for s in stages] == [5_000, 20_000, 8_000, 20_000, 0]

    def test_deterministic(self):
        assert build_stages(5) == build_stages(5)

    def test_returns_tuple(self):
        assert isinstance(build_stages(2), tuple)

    def test_zero_cycles_rejected(self):
        with pytest.raises(ValueError):
            build_stages(0)


class TestStage:

    def test_frozen(self):
        stage = Stage(WORK, 1000)
        with pytest.raises(dataclasses.FrozenInstanceError):
            stage.duration_ms = 5

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError):
            Stage(WORK, -1)

    def test_zero_duration_allowed(self):
        assert Stage(REST, 0).duration_ms == 0

    def test_rest_and_work_flags(self):
        assert Stage(PREPARE, 1).is_rest
        assert Stage(REST, 1).is_rest
        assert not Stage(FINISH, 1).is_rest
        assert Stage(WORK, 1).is_work
        assert not Stage(REST, 1).is_work
