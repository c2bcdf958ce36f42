"""Main application window for the Tabata timer."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QStatusBar,
)

from .timer.engine import TimerEngine
from .timer.state import Cue
from .ui.timer_widget import TimerWidget
from .ui.stage_list import StageListWidget
from .ui.styles import build_stylesheet
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager

CUE_MESSAGES: dict[Cue, str] = {
    Cue.PREPARE: "Get ready…",
    Cue.STOP:    "Rest!",
    Cue.FINISH:  "Workout complete!",
}


class TabataApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        db_enabled: bool = True,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Tabata Timer")
        self.setMinimumSize(360, 560)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self._settings.build_stages(), self, db_enabled=db_enabled,
        )

        # ── sound manager ─────────────────────────────────────────────
        if sound_manager is None:
            sound_manager = SoundManager(
                parent=self,
                volume=self._settings.sound_volume,
                enabled=self._settings.sound_enabled,
            )
        else:
            sound_manager.volume = self._settings.sound_volume
            sound_manager.enabled = self._settings.sound_enabled
        self._sound_manager = sound_manager

        self._build_ui()
        self._connect_signals()
        self._build_actions()
        self._restore_geometry()
        self._apply_keep_on_top(self._settings.keep_on_top)
        self._refresh_completed(self._timer_engine.times_completed)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        self.setStyleSheet(build_stylesheet())

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 8)
        layout.setSpacing(12)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        layout.addWidget(self._timer_widget)

        self._stage_list = StageListWidget(central)
        self._stage_list.set_stages(self._timer_engine.stages)
        layout.addWidget(self._stage_list, stretch=1)

        self.setCentralWidget(central)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

    def _connect_signals(self) -> None:
        eng = self._timer_engine
        eng.state_changed.connect(self._stage_list.show_state)
        eng.cue.connect(self._on_cue)
        eng.stage_changed.connect(self._on_stage_changed)
        eng.workout_completed.connect(self._refresh_completed)

    def _build_actions(self) -> None:
        """Window-wide shortcuts (Space and Escape are in keyPressEvent)."""
        prev_action = QAction("Previous Stage", self)
        prev_action.setShortcut(QKeySequence("Left"))
        prev_action.triggered.connect(self._on_previous)
        self.addAction(prev_action)

        next_action = QAction("Next Stage", self)
        next_action.setShortcut(QKeySequence("Right"))
        next_action.triggered.connect(self._on_next)
        self.addAction(next_action)

        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        self.addAction(quit_action)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_cue(self, cue: Cue) -> None:
        self._sound_manager.play_cue(cue)
        self._status_bar.showMessage(CUE_MESSAGES[cue], 3000)
        if cue == Cue.FINISH:
            # Bounce the dock icon / flash the taskbar entry
            QApplication.alert(self)

    def _on_stage_changed(self, stage_index: int) -> None:
        if stage_index < 0:
            # reset: cut off a countdown that is still playing
            self._sound_manager.silence()

    def _refresh_completed(self, total: int) -> None:
        self._status_bar.showMessage(f"Workouts completed: {total}")

    def _on_previous(self) -> None:
        self._sound_manager.silence()
        self._sound_manager.click()
        self._timer_engine.previous_stage()

    def _on_next(self) -> None:
        self._sound_manager.silence()
        self._sound_manager.click()
        self._timer_engine.next_stage()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        """Restore window position and size from settings."""
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _apply_keep_on_top(self, on_top: bool) -> None:
        """Apply or remove WindowStaysOnTopHint."""
        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer_engine.pause()
        self._save_geometry()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space starts/pauses, Escape resets."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._timer_engine.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)
