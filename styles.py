"""
styles.py

Application stylesheets - Light and Dark themes - and matching editor
gutter colors.
"""

LIGHT_STYLE = """
QMainWindow {
    background-color: #f1f5f9;
}

QWidget {
    background-color: #ffffff;
    color: #1e293b;
    font-family: "Segoe UI", "SF Pro Display", sans-serif;
    font-size: 13px;
}

QMenuBar {
    background-color: #f8fafc;
    border-bottom: 1px solid #e2e8f0;
    padding: 2px;
}

QMenuBar::item:selected, QMenu::item:selected {
    background-color: #e0e7ff;
    color: #3730a3;
}

QToolBar {
    background-color: #f8fafc;
    border: none;
    border-bottom: 1px solid #e2e8f0;
    spacing: 2px;
}

QToolButton {
    padding: 3px 8px;
    border-radius: 4px;
}

QToolButton:hover {
    background-color: #e2e8f0;
}

QToolButton:checked {
    background-color: #c7d2fe;
}

QTabBar::tab {
    padding: 5px 12px;
    border-bottom: 2px solid transparent;
}

QTabBar::tab:selected {
    border-bottom: 2px solid #6366f1;
}

QPlainTextEdit {
    background-color: #ffffff;
    selection-background-color: #c7d2fe;
}

QStatusBar {
    background-color: #f8fafc;
    color: #475569;
}
"""

DARK_STYLE = """
QMainWindow {
    background-color: #1e1e1e;
}

QWidget {
    background-color: #252526;
    color: #cccccc;
    font-family: "Segoe UI", "SF Pro Display", sans-serif;
    font-size: 13px;
}

QMenuBar {
    background-color: #333333;
    border-bottom: 1px solid #404040;
    padding: 2px;
}

QMenuBar::item:selected, QMenu::item:selected {
    background-color: #094771;
}

QToolBar {
    background-color: #333333;
    border: none;
    border-bottom: 1px solid #404040;
    spacing: 2px;
}

QToolButton {
    padding: 3px 8px;
    border-radius: 4px;
}

QToolButton:hover {
    background-color: #3e3e42;
}

QToolButton:checked {
    background-color: #094771;
}

QTabBar::tab {
    padding: 5px 12px;
    border-bottom: 2px solid transparent;
}

QTabBar::tab:selected {
    border-bottom: 2px solid #0078D4;
}

QPlainTextEdit {
    background-color: #1e1e1e;
    selection-background-color: #264f78;
}

QStatusBar {
    background-color: #007acc;
    color: #ffffff;
}
"""

STYLES = {
    "Light": LIGHT_STYLE,
    "Dark": DARK_STYLE,
}

DEFAULT_STYLE = "Light"

# Line number area colors for the code editor
LINE_NUMBER_COLORS = {
    "Light": {
        "background": "#f1f5f9",      # Slightly darker than editor (#ffffff)
        "text": "#94a3b8",            # Dimmed text
        "text_active": "#1e293b",     # Active line text
        "highlight_bg": "#e0e7ff",    # Lines of the element under the cursor
        "highlight_bar": "#6366f1",   # Element bar color
        "current_line_bg": "#e2e8f0", # Current line background
    },
    "Dark": {
        "background": "#1a1a1a",      # Slightly darker than editor (#1e1e1e)
        "text": "#606060",            # Dimmed text
        "text_active": "#ffffff",     # Active line text
        "highlight_bg": "#2A3A4A",    # Lines of the element under the cursor
        "highlight_bar": "#0078D4",   # Element bar color
        "current_line_bg": "#2d2d2d", # Current line background
    },
}
