"""
tests/test_main_window.py

End-to-end wiring of the main window: editor events flow through the
coordinator and channel into the preview.
"""

from __future__ import annotations

import pytest
from PyQt6.QtWidgets import QMessageBox

from main import NEW_DOCUMENT_TEXT, MainWindow
from settings import SettingsManager


@pytest.fixture()
def main_window(qapp, tmp_path):
    """Create a fresh MainWindow for each test."""
    sm = SettingsManager(settings_dir=tmp_path / "config")
    mw = MainWindow(sm)
    mw.resize(1200, 800)
    mw.show()
    qapp.processEvents()
    yield mw
    for editor in mw.editors():
        editor.document().setModified(False)
    mw.close()


def move_cursor(editor, offset):
    cursor = editor.textCursor()
    cursor.setPosition(offset)
    editor.setTextCursor(cursor)


class TestSync:
    def test_starts_with_untitled_document(self, main_window):
        mw = main_window
        assert mw.tabs.count() == 1
        assert mw.current_editor().toPlainText() == NEW_DOCUMENT_TEXT
        mw.drain_channel()
        assert mw.preview.document is not None

    def test_cursor_in_path_highlights_segment(self, main_window):
        mw = main_window
        editor = mw.current_editor()
        move_cursor(editor, NEW_DOCUMENT_TEXT.index("C40"))
        mw.drain_channel()
        assert mw.preview.displayed_address == (0, 1)
        assert mw.preview.highlight.segment.kind == "C"
        # Path is on the third line
        assert editor.highlighted_line_range() == (2, 2)
        assert "segment C" in mw.statusBar().currentMessage()

    def test_cursor_in_polygon_marks_vertex(self, main_window):
        mw = main_window
        move_cursor(mw.current_editor(), NEW_DOCUMENT_TEXT.index("90,20") + 1)
        mw.drain_channel()
        assert mw.preview.highlight.polygon_points.active_index == 1

    def test_edit_updates_preview(self, main_window):
        mw = main_window
        mw.drain_channel()
        editor = mw.current_editor()
        editor.setPlainText('<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"/>')
        mw.drain_channel()
        assert len(mw.preview.document.root) == 0


class TestFiles:
    def test_open_and_save(self, main_window, tmp_path):
        mw = main_window
        path = tmp_path / "drawing.svg"
        path.write_text(NEW_DOCUMENT_TEXT, encoding="utf-8")

        assert mw.open_file(path)
        assert mw.tabs.count() == 2
        assert mw.current_editor().path == path.resolve()
        assert mw.settings_manager.settings.last_directory == str(path.resolve().parent)

        # Opening the same file again switches to its tab
        mw.tabs.setCurrentIndex(0)
        assert mw.open_file(path)
        assert mw.tabs.count() == 2
        assert mw.tabs.currentIndex() == 1

        mw.current_editor().setPlainText("<svg/>")
        assert mw.save_current()
        assert path.read_text(encoding="utf-8") == "<svg/>"
        assert not mw.current_editor().document().isModified()

    def test_open_missing_file_reports_error(self, main_window, tmp_path, monkeypatch):
        errors = []
        monkeypatch.setattr(QMessageBox, "critical", lambda *args: errors.append(args))
        assert not main_window.open_file(tmp_path / "missing.svg")
        assert len(errors) == 1
        assert main_window.tabs.count() == 1

    def test_switching_tabs_loads_that_document(self, main_window, tmp_path):
        mw = main_window
        path = tmp_path / "small.svg"
        path.write_text('<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"/>', encoding="utf-8")
        mw.open_file(path)
        mw.drain_channel()
        assert len(mw.preview.document.root) == 0
        mw.tabs.setCurrentIndex(0)
        mw.drain_channel()
        assert len(mw.preview.document.root) == 3


class TestTheme:
    def test_apply_theme_records_setting(self, main_window):
        main_window.apply_theme("Dark")
        assert main_window.settings_manager.settings.theme == "Dark"
        main_window.apply_theme("Nope")
        assert main_window.settings_manager.settings.theme == "Light"
