"""Tests for the timer card, stage list and main window wiring."""

from __future__ import annotations

import pytest

from tabata.app import TabataApp, CUE_MESSAGES
from tabata.audio.sounds import SoundManager
from tabata.settings import Settings
from tabata.timer.state import Cue
from tabata.ui.stage_list import StageListWidget
from tabata.ui.timer_widget import TimerWidget


def run_program(engine, step_ms: int = 500) -> None:
    while not engine.state.reached_end:
        engine.feed(step_ms)


class TestTimerWidget:

    @pytest.fixture
    def widget(self, engine_no_db):
        return TimerWidget(engine_no_db)

    def test_initial_display(self, widget):
        assert widget.stage_text == "READY"
        assert widget.time_text == "00:00.000"
        assert widget.button_text == "Start"

    def test_countdown_follows_state(self, widget, engine_no_db):
        engine_no_db.feed(1)
        assert widget.stage_text == "PREPARE"
        assert widget.time_text == "00:09.999"
        engine_no_db.feed(10_000)
        assert widget.stage_text == "WORK"
        assert widget.time_text == "00:29.999"

    def test_button_labels(self, widget, engine_no_db):
        engine_no_db.start()
        assert widget.button_text == "Pause"
        engine_no_db.pause()
        assert widget.button_text in ("Resume", "Start")
        engine_no_db.feed(1)
        assert widget.button_text == "Resume"

    def test_finished_display(self, widget, engine_no_db):
        run_program(engine_no_db)
        assert widget.stage_text == "DONE"
        assert widget.button_text == "Again"


class TestStageList:

    def test_one_row_per_stage(self, qapp, stages):
        lst = StageListWidget()
        lst.set_stages(stages)
        assert lst.count() == len(stages)
        assert "Prepare" in lst.item(0).text()
        assert "30s" in lst.item(1).text()

    def test_tracks_active_stage(self, qapp, engine_no_db):
        lst = StageListWidget()
        lst.set_stages(engine_no_db.stages)
        engine_no_db.state_changed.connect(lst.show_state)
        assert lst.active_index == -1
        engine_no_db.feed(10_500)
        assert lst.active_index == 1
        engine_no_db.next_stage()
        assert lst.active_index == 2


class TestMainWindow:

    @pytest.fixture
    def window(self, qapp, tmp_path):
        sounds = SoundManager(sounds_dir=tmp_path / "sounds")
        return TabataApp(Settings(cycles=2), db_enabled=False, sound_manager=sounds)

    def test_program_from_settings(self, window):
        assert len(window._timer_engine.stages) == 5
        assert window._stage_list.count() == 5

    def test_cue_shows_message(self, window):
        window._on_cue(Cue.STOP)
        assert window.statusBar().currentMessage() == CUE_MESSAGES[Cue.STOP]

    def test_completion_shown(self, window):
        run_program(window._timer_engine)
        assert window.statusBar().currentMessage() == "Workouts completed: 1"

    def test_audio_settings_applied(self, qapp, tmp_path):
        sounds = SoundManager(sounds_dir=tmp_path / "sounds")
        settings = Settings(cycles=2, sound_volume=30, sound_enabled=False)
        TabataApp(settings, db_enabled=False, sound_manager=sounds)
        assert sounds.volume == 30
        assert not sounds.enabled

    def test_navigation_keeps_working_with_sound(self, window):
        window._on_next()
        window._on_next()
        window._on_previous()
        assert window._timer_engine.state.stage_index == 0
