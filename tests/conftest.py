"""
tests/conftest.py

Shared fixtures: a session QApplication on the offscreen platform and
settings isolated from the user's config directory.
"""

from __future__ import annotations

import os
import sys

import pytest

# Headless Qt for widget tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure project root is on sys.path so imports work
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import settings
from settings import SettingsManager


@pytest.fixture(autouse=True, scope="session")
def isolated_settings(tmp_path_factory):
    """Point the settings singleton at a throwaway directory."""
    settings._settings_manager = SettingsManager(settings_dir=tmp_path_factory.mktemp("settings"))
    yield settings._settings_manager


@pytest.fixture(scope="session")
def qapp():
    """Provide a single QApplication for the entire test session."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication(sys.argv)
    yield app
