"""Main timer card.

Layout (top → bottom):
    - Stage name (coloured per stage)
    - ``MM:SS.mmm`` countdown
    - Progress bar through the current stage
    - "Up next" hint
    - Previous / Start-Pause / Next / Reset buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QProgressBar,
)

from ..timer.engine import TimerEngine
from ..timer.state import TimerState
from ..utils import format_duration
from .styles import PALETTE, stage_color


class TimerWidget(QWidget):
    """Countdown card bound to a :class:`TimerEngine`."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)
        self._on_running_changed(engine.is_running)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(8)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._stage_label = QLabel("READY", card)
        self._stage_label.setObjectName("stageName")
        self._stage_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._stage_label)

        self._time_label = QLabel(format_duration(0), card)
        self._time_label.setObjectName("countdown")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        self._next_label = QLabel("", card)
        self._next_label.setObjectName("upNext")
        self._next_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._next_label)

        layout.addSpacing(8)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(10)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._prev_btn = QPushButton("◀", card)
        self._prev_btn.setToolTip("Previous stage")
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._next_btn = QPushButton("▶", card)
        self._next_btn.setToolTip("Next stage")
        self._reset_btn = QPushButton("Reset", card)

        for btn in (self._prev_btn, self._start_pause_btn, self._next_btn, self._reset_btn):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._prev_btn.clicked.connect(self._engine.previous_stage)
        self._next_btn.clicked.connect(self._engine.next_stage)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.running_changed.connect(self._on_running_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_running_changed(self, running: bool) -> None:
        if running:
            self._start_pause_btn.setText("Pause")
        elif self._engine.state.reached_end:
            self._start_pause_btn.setText("Again")
        elif self._engine.state.is_started:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start")

    def _on_state_changed(self, state: TimerState) -> None:
        stage = state.stage
        if stage is not None:
            name = stage.name.upper()
        elif state.reached_end:
            name = "DONE"
        else:
            name = "READY"
        colour = stage_color(stage.name if stage else None)
        self._stage_label.setText(name)
        self._stage_label.setStyleSheet(f"color: {colour};")

        self._time_label.setText(format_duration(state.remaining_stage_time_ms))
        self._progress.setValue(round(state.percent_complete * 1000))
        self._progress.setStyleSheet(
            f"QProgressBar::chunk {{ background-color: {colour}; }}"
        )

        upcoming = state.next_stage
        if upcoming is not None:
            self._next_label.setText(
                f"Up next: {upcoming.name}  ·  total left {format_duration(state.total_remaining_ms)}"
            )
        else:
            self._next_label.setText("")
        self._next_label.setStyleSheet(f"color: {PALETTE['text_muted']};")

        if not self._engine.is_running:
            self._on_running_changed(False)

    # ── read-only accessors (used by tests) ──────────────────────────────

    @property
    def stage_text(self) -> str:
        return self._stage_label.text()

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def button_text(self) -> str:
        return self._start_pause_btn.text()
