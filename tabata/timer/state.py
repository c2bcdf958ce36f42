"""Immutable stage-sequencing state machine.

States
------
NOT STARTED   ``stage_index == -1``, nothing counted down yet.
IN STAGE i    ``0 <= stage_index < N``, counting down stage *i*.
FINISHED      ``stage_index == N``, ``reached_end`` is True.

Transitions
-----------
NOT STARTED → IN STAGE 0 → ... → IN STAGE N-1 → FINISHED   (advance)
Any → IN STAGE i                                           (goto_relative)
Any → NOT STARTED                                          (restart)

Every transition returns a brand-new :class:`TimerState`; nothing is
mutated.  ``events`` holds the cues produced by the transition that
created the state, not a history.

Cues are evaluated from the previous and the final state of a single
``advance`` call only.  When one delta skips several stage boundaries
(e.g. the host was suspended for minutes) the cues of the skipped
intermediate boundaries are not reported; only the net transition's edge
is evaluated.  Whether a Work stage's end is a ``stop`` or a ``finish``
depends on where the call lands: reaching the ``Finish`` stage (or the
end of the program) is a ``finish``, even when earlier Work stages were
skipped on the way.

A Work stage that lands on exactly 0 ms reports its end on that call and
not again on the following ones, zero-length ticks included.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence

from .stages import FINISH, Stage


class Cue(Enum):
    PREPARE = "prepare"   # 3 s before a work stage begins
    STOP = "stop"         # a work stage just ended
    FINISH = "finish"     # the last work stage just ended


PREPARE_CUE_MS = 3000


@dataclass(frozen=True)
class TimerState:
    """One snapshot of the workout timer.

    Build the initial sentinel state with ``TimerState(stages)`` and feed
    it measured deltas::

        state = TimerState(build_stages(8))
        state = state.advance(16)
        for cue in state.events:
            ...
    """

    stages: tuple[Stage, ...] = field(repr=False)
    stage_index: int = -1
    remaining_stage_time_ms: int = 0
    reached_end: bool = False
    events: tuple[Cue, ...] = ()
    # the active Work stage sits at 0 and its stop/finish was already sent
    work_end_reported: bool = field(default=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.stages, tuple):
            object.__setattr__(self, "stages", tuple(self.stages))
        if not isinstance(self.events, tuple):
            object.__setattr__(self, "events", tuple(self.events))

    # ══════════════════════════════════════════════════════════════════
    #  DERIVED VALUES
    # ══════════════════════════════════════════════════════════════════

    @property
    def stage_count(self) -> int:
        return len(self.stages)

    @property
    def stage(self) -> Stage | None:
        """The stage being counted down, or None before start / after end."""
        return self._stage_at(self.stage_index)

    @property
    def next_stage(self) -> Stage | None:
        """The stage after the active one (the first stage when not started)."""
        return self._stage_at(self.stage_index + 1)

    @property
    def is_started(self) -> bool:
        return self.stage_index >= 0

    @property
    def is_running(self) -> bool:
        return 0 <= self.stage_index < self.stage_count

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the active stage."""
        stage = self.stage
        if stage is None:
            return 1.0 if self.reached_end else 0.0
        if stage.duration_ms <= 0:
            return 1.0
        elapsed = stage.duration_ms - self.remaining_stage_time_ms
        return max(0.0, min(1.0, elapsed / stage.duration_ms))

    @property
    def total_remaining_ms(self) -> int:
        """Milliseconds left until the whole workout is over."""
        if self.stage_index >= self.stage_count:
            return 0
        later = self.stages[self.stage_index + 1:]
        current = self.remaining_stage_time_ms if self.is_started else 0
        return current + sum(s.duration_ms for s in later)

    def _stage_at(self, index: int) -> Stage | None:
        if 0 <= index < self.stage_count:
            return self.stages[index]
        return None

    # ══════════════════════════════════════════════════════════════════
    #  TRANSITIONS
    # ══════════════════════════════════════════════════════════════════

    def advance(self, delta_ms: int) -> TimerState:
        """Apply *delta_ms* of elapsed time and return the next state.

        A delta longer than the current stage spills over into as many
        following stages as it covers.  A finished state stays finished.
        """
        count = self.stage_count
        if self.stage_index >= count:
            return replace(self, remaining_stage_time_ms=0, reached_end=True, events=())

        index = self.stage_index
        remaining = self.remaining_stage_time_ms - delta_ms
        reached_end = self.reached_end

        while remaining < 0:
            index = min(index + 1, count)
            if index < count:
                remaining += self.stages[index].duration_ms
            else:
                remaining = 0
                reached_end = True

        events = self._cues_for(index, remaining, delta_ms)
        work_end_reported = index == self.stage_index and (
            self.work_end_reported
            or Cue.STOP in events
            or Cue.FINISH in events
        )
        return TimerState(
            stages=self.stages,
            stage_index=index,
            remaining_stage_time_ms=remaining,
            reached_end=reached_end,
            events=events,
            work_end_reported=work_end_reported,
        )

    def goto_relative(self, amount: int) -> TimerState:
        """Jump *amount* stages forward (negative: back), clamped to the
        program.  The target stage starts from its full duration and no
        cues are emitted.
        """
        if not self.stages:
            return self.restart()
        index = max(0, min(self.stage_index + amount, self.stage_count - 1))
        return TimerState(
            stages=self.stages,
            stage_index=index,
            remaining_stage_time_ms=self.stages[index].duration_ms,
            reached_end=False,
        )

    def restart(self) -> TimerState:
        """Fresh not-started state for the same program."""
        return TimerState(self.stages)

    # ── cue detection ─────────────────────────────────────────────────

    def _cues_for(self, index: int, remaining: int, delta_ms: int) -> tuple[Cue, ...]:
        cues: list[Cue] = []

        # 3-second warning while a rest-type stage runs out
        new_stage = self._stage_at(index)
        if (
            new_stage is not None
            and new_stage.is_rest
            and index == self.stage_index
            and self.remaining_stage_time_ms > PREPARE_CUE_MS
            and remaining <= PREPARE_CUE_MS
        ):
            cues.append(Cue.PREPARE)

        # a work stage ran out
        old_stage = self.stage
        if (
            old_stage is not None
            and old_stage.is_work
            and self.remaining_stage_time_ms - delta_ms <= 0
            and not self.work_end_reported
        ):
            if index == self.stage_index:
                # parked at exactly 0: judge by the stage that comes next
                landing = self._stage_at(index + 1)
            else:
                landing = new_stage
            if landing is None or landing.name == FINISH:
                cues.append(Cue.FINISH)
            else:
                cues.append(Cue.STOP)

        return tuple(cues)


def initial_state(stages: Sequence[Stage]) -> TimerState:
    """Not-started state for *stages*."""
    return TimerState(tuple(stages))
