"""
main.py

SvgSync - live SVG source / preview synchronization

PyQt6 application with:
- Tabbed SVG source editors
- A rendered preview that highlights and frames the element, path segment
  or polygon vertex under the editor cursor
- Zoom, fit and background controls for the preview

Usage:
    python main.py [file.svg ...]

Dependencies:
    pip install PyQt6 platformdirs tomli-w

Environment:
    SVGSYNC_TRACE=1 (optional, traces sync events to stderr and svgsync_debug.log)
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Sequence

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QActionGroup, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QTabWidget,
    QToolBar,
)

from debug_trace import trace, trace_exception, close_log
from editor import SvgCodeEditor
from models import HighlightMessage
from preview import SvgPreviewView
from settings import SettingsManager, get_settings
from styles import STYLES, DEFAULT_STYLE, LINE_NUMBER_COLORS
from sync import HighlightCoordinator, MessageChannel

SVG_FILTER = "SVG files (*.svg);;All files (*)"

NEW_DOCUMENT_TEXT = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100" width="400" height="400">
  <rect x="10" y="10" width="30" height="30" fill="#6366f1"/>
  <path d="M10,80 C40,10 65,10 95,80 S150,150 180,80" fill="none" stroke="#1e293b"/>
  <polygon points="60,20 90,20 75,45" fill="#f59e0b"/>
</svg>
"""


class MainWindow(QMainWindow):
    """Main application window: editors on the left, preview on the right.

    Editor events run the highlight coordinator synchronously; its messages
    go through a channel that the preview drains on the next event-loop
    turn.

    Args:
        settings_manager: The SettingsManager instance for application settings.
        paths: Files to open at startup; an untitled document when empty.
    """

    def __init__(self, settings_manager: SettingsManager, paths: Sequence[Path] = ()):
        super().__init__()
        self.settings_manager = settings_manager
        self.setWindowTitle("SvgSync")

        # Editor side -> preview side
        self.channel = MessageChannel()
        self.coordinator = HighlightCoordinator(self.channel)
        self._drain_scheduled = False
        self.channel.set_notify(self._schedule_drain)

        self.tabs = QTabWidget()
        self.tabs.setTabsClosable(True)
        self.tabs.setDocumentMode(True)
        self.tabs.setMovable(True)

        self.preview = SvgPreviewView()

        self.main_splitter = QSplitter(Qt.Orientation.Horizontal)
        self.main_splitter.addWidget(self.tabs)
        self.main_splitter.addWidget(self.preview)
        self.main_splitter.setStretchFactor(0, 1)
        self.main_splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.main_splitter)

        # Build UI (menus first since toolbar references menu actions)
        self._build_menus()
        self._build_toolbar()

        self.tabs.currentChanged.connect(self._on_active_document_changed)
        self.tabs.tabCloseRequested.connect(self.close_document)
        self.preview.zoom_changed.connect(self._on_zoom_changed)

        self.statusBar().showMessage("Move the cursor through the SVG source to highlight elements.")

        opened = [p for p in paths if self.open_file(Path(p))]
        if not opened:
            self.new_document()

    # ---- UI construction ----

    def _build_menus(self):
        """Build the application menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")

        new_act = QAction("New", self)
        new_act.setShortcut(QKeySequence.StandardKey.New)
        new_act.triggered.connect(self.new_document)
        file_menu.addAction(new_act)

        open_act = QAction("Open...", self)
        open_act.setShortcut(QKeySequence.StandardKey.Open)
        open_act.triggered.connect(self.open_file_dialog)
        file_menu.addAction(open_act)

        file_menu.addSeparator()

        save_act = QAction("Save", self)
        save_act.setShortcut(QKeySequence.StandardKey.Save)
        save_act.triggered.connect(self.save_current)
        file_menu.addAction(save_act)

        save_as_act = QAction("Save As...", self)
        save_as_act.setShortcut(QKeySequence.StandardKey.SaveAs)
        save_as_act.triggered.connect(self.save_current_as)
        file_menu.addAction(save_as_act)

        close_act = QAction("Close", self)
        close_act.setShortcut(QKeySequence.StandardKey.Close)
        close_act.triggered.connect(lambda: self.close_document(self.tabs.currentIndex()))
        file_menu.addAction(close_act)

        file_menu.addSeparator()

        exit_act = QAction("E&xit", self)
        exit_act.triggered.connect(self.close)
        file_menu.addAction(exit_act)

        view_menu = menubar.addMenu("&View")

        self.zoom_in_act = QAction("Zoom In", self)
        self.zoom_in_act.setShortcut(QKeySequence.StandardKey.ZoomIn)
        self.zoom_in_act.triggered.connect(lambda: self.preview.zoom_in())
        view_menu.addAction(self.zoom_in_act)

        self.zoom_out_act = QAction("Zoom Out", self)
        self.zoom_out_act.setShortcut(QKeySequence.StandardKey.ZoomOut)
        self.zoom_out_act.triggered.connect(lambda: self.preview.zoom_out())
        view_menu.addAction(self.zoom_out_act)

        view_menu.addSeparator()

        self.zoom_fit_act = QAction("Fit to View", self)
        self.zoom_fit_act.setShortcut("Ctrl+F")
        self.zoom_fit_act.triggered.connect(lambda: self.preview.zoom_fit())
        view_menu.addAction(self.zoom_fit_act)

        self.zoom_reset_act = QAction("Zoom 100%", self)
        self.zoom_reset_act.setShortcut("Ctrl+1")
        self.zoom_reset_act.triggered.connect(lambda: self.preview.zoom_reset())
        view_menu.addAction(self.zoom_reset_act)

        view_menu.addSeparator()

        self.bg_act = QAction("Checkered Background", self)
        self.bg_act.setCheckable(True)
        self.bg_act.setChecked(self.preview.is_checkered_background())
        self.bg_act.toggled.connect(self._on_background_toggled)
        view_menu.addAction(self.bg_act)

        theme_menu = view_menu.addMenu("Theme")
        theme_group = QActionGroup(self)
        current_theme = self.settings_manager.settings.theme
        for name in STYLES:
            act = QAction(name, self)
            act.setCheckable(True)
            act.setChecked(name == current_theme)
            act.triggered.connect(lambda checked, n=name: self.apply_theme(n))
            theme_group.addAction(act)
            theme_menu.addAction(act)

    def _build_toolbar(self):
        """Build the preview toolbar."""
        tb = QToolBar("Preview")
        tb.setMovable(False)
        self.addToolBar(tb)

        tb.addAction(self.zoom_in_act)
        self.zoom_label = QLabel("100%")
        self.zoom_label.setMinimumWidth(48)
        self.zoom_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        tb.addWidget(self.zoom_label)
        tb.addAction(self.zoom_out_act)
        tb.addAction(self.zoom_fit_act)
        tb.addAction(self.zoom_reset_act)
        tb.addSeparator()
        tb.addAction(self.bg_act)

    # ---- documents ----

    def current_editor(self) -> Optional[SvgCodeEditor]:
        widget = self.tabs.currentWidget()
        return widget if isinstance(widget, SvgCodeEditor) else None

    def editors(self) -> List[SvgCodeEditor]:
        return [self.tabs.widget(i) for i in range(self.tabs.count())]

    def _add_editor(self, text: str, path: Optional[Path]) -> SvgCodeEditor:
        editor = SvgCodeEditor(path)
        editor.setPlainText(text)
        editor.document().setModified(False)
        editor.set_line_number_colors(LINE_NUMBER_COLORS.get(self.settings_manager.settings.theme, {}))

        editor.textChanged.connect(lambda e=editor: self._on_text_changed(e))
        editor.cursor_offset_changed.connect(lambda offset, e=editor: self._on_cursor_moved(e, offset))
        editor.document().modificationChanged.connect(lambda _m, e=editor: self._update_tab_title(e))

        index = self.tabs.addTab(editor, editor.display_name)
        self.tabs.setCurrentIndex(index)
        return editor

    def new_document(self):
        self._add_editor(NEW_DOCUMENT_TEXT, None)

    def open_file_dialog(self):
        start_dir = str(self.settings_manager.get_last_directory())
        paths, _ = QFileDialog.getOpenFileNames(self, "Open SVG", start_dir, SVG_FILTER)
        for p in paths:
            self.open_file(Path(p))

    def open_file(self, path: Path) -> bool:
        """Open ``path`` in a new tab, or switch to it if already open."""
        path = path.resolve()
        for i, editor in enumerate(self.editors()):
            if editor.path == path:
                self.tabs.setCurrentIndex(i)
                return True
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            QMessageBox.critical(self, "Open failed", f"Could not open {path}:\n{e}")
            return False
        self.settings_manager.settings.last_directory = str(path.parent)
        trace(f"Opened {path}", "MAIN")
        self._add_editor(text, path)
        return True

    def save_current(self) -> bool:
        editor = self.current_editor()
        if editor is None:
            return False
        if editor.path is None:
            return self.save_current_as()
        return self._write(editor, editor.path)

    def save_current_as(self) -> bool:
        editor = self.current_editor()
        if editor is None:
            return False
        start = str(self.settings_manager.get_last_directory() / editor.display_name)
        path, _ = QFileDialog.getSaveFileName(self, "Save SVG", start, SVG_FILTER)
        if not path:
            return False
        return self._write(editor, Path(path))

    def _write(self, editor: SvgCodeEditor, path: Path) -> bool:
        try:
            path.write_text(editor.toPlainText(), encoding="utf-8")
        except OSError as e:
            QMessageBox.critical(self, "Save failed", f"Could not save {path}:\n{e}")
            return False
        editor.path = path
        editor.document().setModified(False)
        self.settings_manager.settings.last_directory = str(path.parent)
        self._update_tab_title(editor)
        self.statusBar().showMessage(f"Saved {path}")
        return True

    def close_document(self, index: int):
        editor = self.tabs.widget(index)
        if editor is None:
            return
        if editor.document().isModified():
            answer = QMessageBox.question(
                self, "Unsaved changes", f"Discard changes to {editor.display_name}?",
                QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel,
            )
            if answer != QMessageBox.StandardButton.Discard:
                return
        self.tabs.removeTab(index)
        editor.deleteLater()

    def _update_tab_title(self, editor: SvgCodeEditor):
        index = self.tabs.indexOf(editor)
        if index < 0:
            return
        marker = "*" if editor.document().isModified() else ""
        self.tabs.setTabText(index, editor.display_name + marker)
        if editor is self.current_editor():
            self.setWindowTitle(f"SvgSync - {editor.display_name}{marker}")

    # ---- sync events ----

    def _on_text_changed(self, editor: SvgCodeEditor):
        if editor is not self.current_editor():
            return
        msg = self.coordinator.on_text_changed(editor.toPlainText(), editor.cursor_offset())
        self._show_highlight(editor, msg)

    def _on_cursor_moved(self, editor: SvgCodeEditor, offset: int):
        if editor is not self.current_editor():
            return
        msg = self.coordinator.on_cursor_moved(editor.toPlainText(), offset)
        self._show_highlight(editor, msg)

    def _on_active_document_changed(self, index: int):
        editor = self.current_editor()
        self.preview.clear()
        if editor is None:
            self.setWindowTitle("SvgSync")
            return
        self._update_tab_title(editor)
        msg = self.coordinator.on_document_changed(editor.toPlainText(), editor.cursor_offset())
        self._show_highlight(editor, msg)

    def _schedule_drain(self):
        if self._drain_scheduled:
            return
        self._drain_scheduled = True
        QTimer.singleShot(0, self.drain_channel)

    def drain_channel(self):
        """Deliver pending channel messages to the preview."""
        self._drain_scheduled = False
        for msg in self.channel.drain():
            self.preview.apply_message(msg)

    def _show_highlight(self, editor: SvgCodeEditor, msg: HighlightMessage):
        if msg.span is None:
            editor.clear_highlighted_span()
            self.statusBar().showMessage("No element at cursor")
            return
        editor.set_highlighted_span(msg.span.open_tag_start, msg.span.range_end)
        parts = [f"<{msg.span.tag_name}>", "path " + ".".join(str(i) for i in msg.address)]
        if msg.segment is not None:
            parts.append(f"segment {msg.segment.kind}")
        if msg.polygon_points is not None and msg.polygon_points.active_index is not None:
            parts.append(f"vertex {msg.polygon_points.active_index}")
        self.statusBar().showMessage("  |  ".join(parts))

    # ---- preview controls ----

    def _on_zoom_changed(self, scale: float):
        self.zoom_label.setText(f"{scale * 100:.0f}%")

    def _on_background_toggled(self, checked: bool):
        self.preview.set_checkered_background(checked)
        self.settings_manager.settings.preview.checkered_background = checked

    def apply_theme(self, name: str):
        if name not in STYLES:
            name = DEFAULT_STYLE
        app = QApplication.instance()
        if app is not None:
            app.setStyleSheet(STYLES[name])
        self.settings_manager.settings.theme = name
        for editor in self.editors():
            editor.set_line_number_colors(LINE_NUMBER_COLORS[name])

    def closeEvent(self, event):
        modified = [e.display_name for e in self.editors() if e.document().isModified()]
        if modified:
            answer = QMessageBox.question(
                self, "Unsaved changes", "Discard changes to " + ", ".join(modified) + "?",
                QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel,
            )
            if answer != QMessageBox.StandardButton.Discard:
                event.ignore()
                return
        event.accept()


def main():
    """Application entry point."""
    trace("Application starting", "MAIN")
    app = QApplication(sys.argv)

    trace("Loading settings", "MAIN")
    settings_manager = get_settings()
    settings_manager.ensure_file_complete()

    initial_style = settings_manager.settings.theme
    if initial_style not in STYLES:
        initial_style = DEFAULT_STYLE
        settings_manager.settings.theme = initial_style
    app.setStyleSheet(STYLES[initial_style])

    def save_on_quit():
        trace("Saving settings on quit", "MAIN")
        settings_manager.save()
        close_log()

    app.aboutToQuit.connect(save_on_quit)

    trace("Creating MainWindow", "MAIN")
    w = MainWindow(settings_manager, [Path(a) for a in sys.argv[1:]])
    w.resize(1400, 900)
    w.show()
    trace("Entering event loop", "MAIN")
    sys.exit(app.exec())


if __name__ == "__main__":
    # Set up global exception handler to catch crashes
    def excepthook(exc_type, exc_value, exc_tb):
        import traceback
        trace("UNCAUGHT EXCEPTION:", "CRASH")
        trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
        close_log()
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = excepthook

    try:
        main()
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", "CRASH")
        trace_exception("Fatal exception")
        close_log()
        raise
