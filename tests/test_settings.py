"""
tests/test_settings.py

TOML settings persistence: defaults, save/load and corrupt files.
"""

from __future__ import annotations

from pathlib import Path

from settings import AppSettings, SettingsManager


class TestSettingsManager:
    def test_defaults_without_file(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        assert sm.settings == AppSettings()
        assert not sm.get_settings_path().exists()

    def test_ensure_file_complete_writes_all_sections(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        sm.ensure_file_complete()
        text = sm.get_settings_path().read_text(encoding="utf-8")
        for section in ("[general]", "[editor.font]", "[editor.syntax]", "[preview]", "[overlay]"):
            assert section in text

    def test_save_and_reload(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        sm.settings.theme = "Dark"
        sm.settings.preview.fit_padding = 12.0
        sm.settings.overlay.active_vertex_color = "#123456"
        sm.settings.last_directory = str(tmp_path)
        sm.save()

        loaded = SettingsManager(settings_dir=tmp_path).settings
        assert loaded.theme == "Dark"
        assert loaded.preview.fit_padding == 12.0
        assert loaded.overlay.active_vertex_color == "#123456"
        assert loaded.last_directory == str(tmp_path)

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        (tmp_path / "settings.toml").write_text('[preview]\nmax_fit_scale = 4.0\n', encoding="utf-8")
        s = SettingsManager(settings_dir=tmp_path).settings
        assert s.preview.max_fit_scale == 4.0
        assert s.preview.fit_padding == AppSettings().preview.fit_padding
        assert s.editor == AppSettings().editor

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path):
        (tmp_path / "settings.toml").write_text("this is = = not toml [", encoding="utf-8")
        sm = SettingsManager(settings_dir=tmp_path)
        assert sm.settings == AppSettings()

    def test_last_directory_defaults_to_home(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        assert sm.get_last_directory() == Path.home()

    def test_to_toml_round_trips(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        (tmp_path / "settings.toml").write_text(sm.to_toml(), encoding="utf-8")
        assert SettingsManager(settings_dir=tmp_path).settings == sm.settings
