"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/TabataTimer/settings.json

Usage::

    settings = load_settings()
    settings.cycles = 6
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.stages import DEFAULT_CYCLES, Stage, build_stages

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TabataTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

MAX_CYCLES = 99


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── program ───────────────────────────────────────────────────────
    cycles: int = DEFAULT_CYCLES
    prepare_seconds: int = 10
    work_seconds: int = 30
    rest_seconds: int = 10
    finish_seconds: int = 10

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    keep_on_top: bool = False
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 720

    def __post_init__(self) -> None:
        self.cycles = max(1, min(int(self.cycles), MAX_CYCLES))
        self.prepare_seconds = max(0, int(self.prepare_seconds))
        self.work_seconds = max(0, int(self.work_seconds))
        self.rest_seconds = max(0, int(self.rest_seconds))
        self.finish_seconds = max(0, int(self.finish_seconds))
        self.sound_volume = max(0, min(int(self.sound_volume), 100))

    def build_stages(self) -> tuple[Stage, ...]:
        """The workout program described by these settings."""
        return build_stages(
            self.cycles,
            prepare_ms=self.prepare_seconds * 1000,
            work_ms=self.work_seconds * 1000,
            rest_ms=self.rest_seconds * 1000,
            finish_ms=self.finish_seconds * 1000,
        )


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", path, exc)
    return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
