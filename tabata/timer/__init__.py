"""Timer package."""

from .stages import (
    Stage,
    build_stages,
    DEFAULT_CYCLES,
    DEFAULT_STAGES,
    PREPARE,
    WORK,
    REST,
    FINISH,
)
from .state import Cue, TimerState, initial_state, PREPARE_CUE_MS
from .engine import TimerEngine, TICK_INTERVAL_MS

__all__ = [
    "Stage",
    "build_stages",
    "DEFAULT_CYCLES",
    "DEFAULT_STAGES",
    "PREPARE",
    "WORK",
    "REST",
    "FINISH",
    "Cue",
    "TimerState",
    "initial_state",
    "PREPARE_CUE_MS",
    "TimerEngine",
    "TICK_INTERVAL_MS",
]
