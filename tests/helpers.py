"""Shared test helpers for the Tabata timer."""

from tabata.timer.state import TimerState


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_to_end(state: TimerState, step_ms: int = 1000) -> TimerState:
    """Advance in fixed steps until the workout is over."""
    while not state.reached_end:
        state = state.advance(step_ms)
    return state


def collect_cues(state: TimerState, step_ms: int) -> list:
    """Every cue emitted while running *state* to the end in fixed steps."""
    cues = []
    while not state.reached_end:
        state = state.advance(step_ms)
        cues.extend(state.events)
    return cues
