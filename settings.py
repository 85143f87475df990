"""
settings.py

Persistent settings management for SvgSync.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/svgsync/settings.toml
    - macOS: ~/Library/Application Support/svgsync/settings.toml
    - Linux: ~/.config/svgsync/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

APP_NAME = "svgsync"

log = logging.getLogger(__name__)

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Editor Settings
# =============================================================================

@dataclass
class EditorFontSettings:
    """Editor font settings.

    Defaults:
        family: "Consolas"
        size: 10
        tab_width: 4
    """
    family: str = "Consolas"  # Default: "Consolas"
    size: int = 10            # Default: 10 points
    tab_width: int = 4        # Default: 4 characters


@dataclass
class EditorLineNumberSettings:
    """Line number gutter settings.

    Defaults:
        left_margin: 8
        right_margin: 4
        highlight_bar_width: 4
    """
    left_margin: int = 8           # Default: 8 pixels
    right_margin: int = 4          # Default: 4 pixels
    highlight_bar_width: int = 4   # Default: 4 pixels


@dataclass
class EditorSyntaxSettings:
    """SVG syntax highlighting colors.

    Defaults:
        tag_color: "#2E86C1"
        tag_bold: True
        attribute_color: "#8E44AD"
        value_color: "#27AE60"
        comment_color: "#7F8C8D"
        path_command_color: "#D35400"
    """
    tag_color: str = "#2E86C1"           # Default: blue
    tag_bold: bool = True                # Default: True
    attribute_color: str = "#8E44AD"     # Default: purple
    value_color: str = "#27AE60"         # Default: green
    comment_color: str = "#7F8C8D"       # Default: gray
    path_command_color: str = "#D35400"  # Default: orange


@dataclass
class EditorSettings:
    """All editor-related settings."""
    font: EditorFontSettings = field(default_factory=EditorFontSettings)
    line_numbers: EditorLineNumberSettings = field(default_factory=EditorLineNumberSettings)
    syntax: EditorSyntaxSettings = field(default_factory=EditorSyntaxSettings)


# =============================================================================
# Preview Settings
# =============================================================================

@dataclass
class PreviewSettings:
    """Preview pane view-fit and zoom settings.

    Defaults:
        fit_padding: 40.0
        max_fit_scale: 10.0
        wheel_factor: 1.15
        min_zoom: 0.05
        max_zoom: 64.0
        checkered_background: True
    """
    fit_padding: float = 40.0          # Default: 40 pixels around a framed element
    max_fit_scale: float = 10.0        # Default: never frame an element above 10x
    wheel_factor: float = 1.15         # Default: 1.15 (15% per scroll step)
    min_zoom: float = 0.05             # Default: 5%
    max_zoom: float = 64.0             # Default: 6400%
    checkered_background: bool = True  # Default: True


@dataclass
class OverlaySettings:
    """Highlight overlay colors.

    Defaults:
        bounds_color: "#0078D7"
        segment_color: "#00FF00"
        segment_outline_color: "#00CC00"
        control_color: "#00FF88"
        vertex_color: "#0000FF"
        active_vertex_color: "#FF0000"
        opacity: 0.85
    """
    bounds_color: str = "#0078D7"           # Default: blue
    segment_color: str = "#00FF00"          # Default: lime
    segment_outline_color: str = "#00CC00"  # Default: green
    control_color: str = "#00FF88"          # Default: mint
    vertex_color: str = "#0000FF"           # Default: blue
    active_vertex_color: str = "#FF0000"    # Default: red
    opacity: float = 0.85                   # Default: 0.85


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        theme: The UI theme name (must match a key in styles.STYLES).
        last_directory: Directory last used in the open/save dialogs.
        editor: Editor-related settings.
        preview: Preview zoom and fit settings.
        overlay: Highlight overlay colors.
    """
    theme: str = "Light"  # Default: "Light"

    # Empty = user's home directory
    last_directory: str = ""

    editor: EditorSettings = field(default_factory=EditorSettings)
    preview: PreviewSettings = field(default_factory=PreviewSettings)
    overlay: OverlaySettings = field(default_factory=OverlaySettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Override for the config directory (used by tests).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            log.warning("Ignoring unreadable settings file %s: %s", self.settings_file, e)
            return AppSettings()

        return self._parse_toml(data)

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # General section
        general = data.get("general", {})
        settings.theme = general.get("theme", settings.theme)
        settings.last_directory = general.get("last_directory", settings.last_directory)

        # Editor section
        editor = data.get("editor", {})
        if "font" in editor:
            font = editor["font"]
            settings.editor.font.family = font.get("family", settings.editor.font.family)
            settings.editor.font.size = font.get("size", settings.editor.font.size)
            settings.editor.font.tab_width = font.get("tab_width", settings.editor.font.tab_width)
        if "line_numbers" in editor:
            ln = editor["line_numbers"]
            settings.editor.line_numbers.left_margin = ln.get("left_margin", settings.editor.line_numbers.left_margin)
            settings.editor.line_numbers.right_margin = ln.get("right_margin", settings.editor.line_numbers.right_margin)
            settings.editor.line_numbers.highlight_bar_width = ln.get("highlight_bar_width", settings.editor.line_numbers.highlight_bar_width)
        if "syntax" in editor:
            syn = editor["syntax"]
            settings.editor.syntax.tag_color = syn.get("tag_color", settings.editor.syntax.tag_color)
            settings.editor.syntax.tag_bold = syn.get("tag_bold", settings.editor.syntax.tag_bold)
            settings.editor.syntax.attribute_color = syn.get("attribute_color", settings.editor.syntax.attribute_color)
            settings.editor.syntax.value_color = syn.get("value_color", settings.editor.syntax.value_color)
            settings.editor.syntax.comment_color = syn.get("comment_color", settings.editor.syntax.comment_color)
            settings.editor.syntax.path_command_color = syn.get("path_command_color", settings.editor.syntax.path_command_color)

        # Preview section
        pv = data.get("preview", {})
        settings.preview.fit_padding = pv.get("fit_padding", settings.preview.fit_padding)
        settings.preview.max_fit_scale = pv.get("max_fit_scale", settings.preview.max_fit_scale)
        settings.preview.wheel_factor = pv.get("wheel_factor", settings.preview.wheel_factor)
        settings.preview.min_zoom = pv.get("min_zoom", settings.preview.min_zoom)
        settings.preview.max_zoom = pv.get("max_zoom", settings.preview.max_zoom)
        settings.preview.checkered_background = pv.get("checkered_background", settings.preview.checkered_background)

        # Overlay section
        ov = data.get("overlay", {})
        settings.overlay.bounds_color = ov.get("bounds_color", settings.overlay.bounds_color)
        settings.overlay.segment_color = ov.get("segment_color", settings.overlay.segment_color)
        settings.overlay.segment_outline_color = ov.get("segment_outline_color", settings.overlay.segment_outline_color)
        settings.overlay.control_color = ov.get("control_color", settings.overlay.control_color)
        settings.overlay.vertex_color = ov.get("vertex_color", settings.overlay.vertex_color)
        settings.overlay.active_vertex_color = ov.get("active_vertex_color", settings.overlay.active_vertex_color)
        settings.overlay.opacity = ov.get("opacity", settings.overlay.opacity)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "general": {
                "theme": s.theme,
                "last_directory": s.last_directory,
            },
            "editor": {
                "font": {
                    "family": s.editor.font.family,
                    "size": s.editor.font.size,
                    "tab_width": s.editor.font.tab_width,
                },
                "line_numbers": {
                    "left_margin": s.editor.line_numbers.left_margin,
                    "right_margin": s.editor.line_numbers.right_margin,
                    "highlight_bar_width": s.editor.line_numbers.highlight_bar_width,
                },
                "syntax": {
                    "tag_color": s.editor.syntax.tag_color,
                    "tag_bold": s.editor.syntax.tag_bold,
                    "attribute_color": s.editor.syntax.attribute_color,
                    "value_color": s.editor.syntax.value_color,
                    "comment_color": s.editor.syntax.comment_color,
                    "path_command_color": s.editor.syntax.path_command_color,
                },
            },
            "preview": {
                "fit_padding": s.preview.fit_padding,
                "max_fit_scale": s.preview.max_fit_scale,
                "wheel_factor": s.preview.wheel_factor,
                "min_zoom": s.preview.min_zoom,
                "max_zoom": s.preview.max_zoom,
                "checkered_background": s.preview.checkered_background,
            },
            "overlay": {
                "bounds_color": s.overlay.bounds_color,
                "segment_color": s.overlay.segment_color,
                "segment_outline_color": s.overlay.segment_outline_color,
                "control_color": s.overlay.control_color,
                "vertex_color": s.overlay.vertex_color,
                "active_vertex_color": s.overlay.active_vertex_color,
                "opacity": s.overlay.opacity,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string."""
        return tomli_w.dumps(self._to_toml_dict())

    def get_last_directory(self) -> Path:
        """Directory for open/save dialogs; the home directory when unset."""
        if self.settings.last_directory:
            return Path(self.settings.last_directory)
        return Path.home()

    def get_settings_path(self) -> Path:
        """Get the path to the settings file."""
        return self.settings_file
