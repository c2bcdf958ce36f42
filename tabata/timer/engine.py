"""Qt host loop driving the :class:`TimerState` machine.

The engine owns the current state, measures real elapsed time with a
monotonic ``QElapsedTimer`` on every ``QTimer`` timeout (~60 Hz) and feeds
that delta to :meth:`TimerState.advance`.  Because the delta is measured
rather than assumed, a throttled or suspended event loop is caught up on
the next tick instead of losing time.

Controls
--------
start / pause / toggle     run or stop the host loop
reset                      fresh not-started state, loop stopped
next_stage / previous_stage  manual navigation (no cues)
set_stages                 replace the workout program
"""

from __future__ import annotations

import logging
from typing import Sequence

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer, pyqtSignal

from .stages import Stage
from .state import Cue, TimerState

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 16  # ≈60 ticks per second keeps the countdown smooth


class TimerEngine(QObject):
    """Runs a workout program and re-emits what the state machine reports.

    Signals
    -------
    state_changed(state: TimerState)
        Emitted for every new state (tick, navigation, reset).
    stage_changed(stage_index: int)
        Emitted when the active stage index changes.
    cue(cue: Cue)
        One emission per cue produced by a tick.
    running_changed(running: bool)
        Emitted when the host loop starts or stops.
    workout_completed(times_completed: int)
        Emitted after a ``finish`` cue was counted.
    """

    state_changed = pyqtSignal(object)
    stage_changed = pyqtSignal(int)
    cue = pyqtSignal(object)
    running_changed = pyqtSignal(bool)
    workout_completed = pyqtSignal(int)

    def __init__(
        self,
        stages: Sequence[Stage],
        parent: QObject | None = None,
        *,
        db_enabled: bool = True,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._db_enabled = db_enabled
        self._state = TimerState(tuple(stages))
        self._running = False

        self._times_completed = 0
        if self._db_enabled:
            from ..database.db import times_completed
            self._times_completed = times_completed()

        self._clock = QElapsedTimer()
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._state.stages

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def times_completed(self) -> int:
        return self._times_completed

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start (or resume) ticking.  A finished workout starts over."""
        if self._running:
            return
        if self._state.reached_end:
            self._apply(self._state.restart())
        self._clock.start()
        self._qt_timer.start()
        self._set_running(True)
        logger.info("Timer started at stage %d", self._state.stage_index)

    def pause(self) -> None:
        """Stop ticking, keeping the time counted so far."""
        if not self._running:
            return
        self._on_tick()
        self._stop_loop()
        logger.info("Timer paused at stage %d", self._state.stage_index)

    def toggle(self) -> None:
        if self._running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Discard progress and return to the not-started state."""
        self._stop_loop()
        self._apply(self._state.restart())
        logger.info("Timer reset")

    def next_stage(self) -> None:
        self.goto_relative(1)

    def previous_stage(self) -> None:
        self.goto_relative(-1)

    def goto_relative(self, amount: int) -> None:
        """Jump *amount* stages; the target stage restarts from full."""
        if self._running:
            self._clock.restart()
        self._apply(self._state.goto_relative(amount))

    def set_stages(self, stages: Sequence[Stage]) -> None:
        """Load a new workout program.  Stops and resets the timer."""
        self._stop_loop()
        self._apply(TimerState(tuple(stages)))

    def feed(self, delta_ms: int) -> None:
        """Advance the state machine by *delta_ms* of elapsed time."""
        self._apply(self._state.advance(max(0, delta_ms)))

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        elapsed = self._clock.restart()
        if elapsed > 0:
            self.feed(elapsed)

    def _apply(self, new_state: TimerState) -> None:
        old_index = self._state.stage_index
        self._state = new_state
        self.state_changed.emit(new_state)

        if new_state.stage_index != old_index:
            self.stage_changed.emit(new_state.stage_index)

        for cue in new_state.events:
            logger.debug("Cue %s at stage %d", cue.value, new_state.stage_index)
            self.cue.emit(cue)
            if cue == Cue.FINISH:
                self._count_completion()

        if new_state.reached_end and self._running:
            self._stop_loop()

    def _count_completion(self) -> None:
        stages = self._state.stages
        if self._db_enabled:
            from ..database.db import record_completion
            self._times_completed = record_completion(
                cycles=sum(1 for s in stages if s.is_work),
                total_duration_ms=sum(s.duration_ms for s in stages),
            )
        else:
            self._times_completed += 1
        self.workout_completed.emit(self._times_completed)

    def _stop_loop(self) -> None:
        self._qt_timer.stop()
        self._set_running(False)

    def _set_running(self, running: bool) -> None:
        if running == self._running:
            return
        self._running = running
        self.running_changed.emit(running)
