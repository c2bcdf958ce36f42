"""UI package."""

from .timer_widget import TimerWidget
from .stage_list import StageListWidget

__all__ = [
    "TimerWidget",
    "StageListWidget",
]
