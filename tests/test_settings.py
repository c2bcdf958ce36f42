"""Tests for JSON-persisted settings."""

from __future__ import annotations

import json

from tabata.settings import Settings, load_settings, save_settings, MAX_CYCLES
from tabata.timer.stages import WORK


class TestSettingsDefaults:

    def test_program_defaults(self):
        s = Settings()
        assert s.cycles == 8
        assert s.prepare_seconds == 10
        assert s.work_seconds == 30
        assert s.rest_seconds == 10
        assert s.finish_seconds == 10

    def test_audio_defaults(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.sound_volume == 70

    def test_window_defaults(self):
        s = Settings()
        assert s.keep_on_top is False
        assert s.window_x is None


class TestSettingsValidation:

    def test_cycles_clamped(self):
        assert Settings(cycles=0).cycles == 1
        assert Settings(cycles=1000).cycles == MAX_CYCLES

    def test_volume_clamped(self):
        assert Settings(sound_volume=300).sound_volume == 100
        assert Settings(sound_volume=-1).sound_volume == 0

    def test_negative_durations_clamped(self):
        assert Settings(work_seconds=-10).work_seconds == 0


class TestSettingsPersistence:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "settings.json"
        s = Settings(cycles=4, work_seconds=20, sound_volume=30)
        save_settings(s, path)
        assert load_settings(path) == s

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nope.json") == Settings()

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"cycles": 3, "theme": "neon"}), encoding="utf-8")
        assert load_settings(path).cycles == 3

    def test_corrupt_file_gives_defaults(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == Settings()
        assert "Ignoring unreadable settings" in caplog.text

    def test_wrong_value_type_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"cycles": "lots"}), encoding="utf-8")
        assert load_settings(path) == Settings()


class TestSettingsProgram:

    def test_build_stages_uses_settings(self):
        stages = Settings(cycles=3, work_seconds=20, rest_seconds=40).build_stages()
        assert len(stages) == 7
        assert stages[1].name == WORK
        assert stages[1].duration_ms == 20_000
        assert stages[2].duration_ms == 40_000
