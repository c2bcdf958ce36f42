"""Scrolling list of every stage in the program.

The active stage is highlighted in its stage colour and scrolled into
view; stages already done are dimmed.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QFont
from PyQt6.QtWidgets import QAbstractItemView, QListWidget, QListWidgetItem, QWidget

from ..timer.stages import Stage
from ..timer.state import TimerState
from ..utils import format_seconds
from .styles import PALETTE, stage_color


class StageListWidget(QListWidget):
    """One row per stage: ``index  name  duration``."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._active_index = -1

    @property
    def active_index(self) -> int:
        return self._active_index

    def set_stages(self, stages: tuple[Stage, ...]) -> None:
        self.clear()
        self._active_index = -1
        for number, stage in enumerate(stages, start=1):
            item = QListWidgetItem(
                f"{number:>2}   {stage.name:<10} {format_seconds(stage.duration_ms):>5}"
            )
            item.setData(Qt.ItemDataRole.UserRole, stage.name)
            self.addItem(item)
        self._restyle()

    def show_state(self, state: TimerState) -> None:
        if state.stage_index == self._active_index:
            return
        self._active_index = state.stage_index
        self._restyle()
        if 0 <= self._active_index < self.count():
            self.scrollToItem(
                self.item(self._active_index),
                QAbstractItemView.ScrollHint.PositionAtCenter,
            )

    def _restyle(self) -> None:
        for row in range(self.count()):
            item = self.item(row)
            font = QFont(item.font())
            if row == self._active_index:
                colour = QColor(stage_color(item.data(Qt.ItemDataRole.UserRole)))
                item.setBackground(QBrush(colour.darker(250)))
                item.setForeground(QBrush(colour))
                font.setBold(True)
            else:
                item.setBackground(QBrush(Qt.GlobalColor.transparent))
                done = row < self._active_index
                item.setForeground(QBrush(QColor(
                    PALETTE["text_muted"] if done else PALETTE["text"]
                )))
                font.setBold(False)
            item.setFont(font)
