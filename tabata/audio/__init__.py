"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES, CLICK

__all__ = ["SoundManager", "SOUND_NAMES", "CLICK"]
