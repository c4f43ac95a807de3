"""Application theme and stylesheet for PhysCalc GUI."""

from __future__ import annotations

from physcalc.core.config import ColorConfig

_TEMPLATE = """
QMainWindow {
    background-color: %(background)s;
}
QTabWidget::pane {
    border: 1px solid #1e293b;
    background-color: %(background)s;
}
QTabBar::tab {
    background-color: #0f172a;
    color: #cbd5e1;
    padding: 8px 16px;
    border: 1px solid #1e293b;
    border-bottom: none;
    border-top-left-radius: 4px;
    border-top-right-radius: 4px;
    margin-right: 2px;
    font-size: 11px;
}
QTabBar::tab:selected {
    background-color: #1e293b;
    color: %(primary)s;
    border-bottom: 2px solid %(primary)s;
}
QWidget {
    background-color: %(background)s;
    color: #cbd5e1;
    font-size: 11px;
}
QGroupBox {
    border: 1px solid #1e293b;
    border-radius: 4px;
    margin-top: 12px;
    padding-top: 12px;
    font-weight: bold;
    color: %(primary)s;
}
QGroupBox::title {
    subcontrol-origin: margin;
    left: 10px;
    padding: 0 4px;
}
QPushButton {
    background-color: %(primary)s;
    color: #f8fafc;
    border: none;
    border-radius: 4px;
    padding: 6px 16px;
    font-weight: bold;
    min-height: 28px;
}
QPushButton:disabled {
    background-color: #334155;
    color: #64748b;
}
QLineEdit, QComboBox {
    background-color: #0f172a;
    color: #e2e8f0;
    border: 1px solid #1e293b;
    border-radius: 3px;
    padding: 3px 6px;
    min-height: 22px;
}
QLineEdit:focus, QComboBox:focus {
    border: 1px solid %(primary)s;
}
QLineEdit[invalid="true"] {
    border: 1px solid %(marker)s;
}
QComboBox QAbstractItemView {
    background-color: #0f172a;
    color: #e2e8f0;
    selection-background-color: #1e293b;
}
QTableWidget, QListWidget {
    background-color: #0b1120;
    alternate-background-color: %(background)s;
    color: #e2e8f0;
    gridline-color: #1e293b;
    border: 1px solid #1e293b;
    border-radius: 3px;
}
QHeaderView::section {
    background-color: #1e293b;
    color: %(primary)s;
    padding: 4px 6px;
    border: none;
    font-weight: bold;
    font-size: 10px;
}
QLabel#result {
    color: %(accent)s;
    font-size: 16px;
    font-weight: bold;
}
QSplitter::handle {
    background-color: #1e293b;
}
QStatusBar {
    background-color: #0b1120;
    color: #64748b;
    font-size: 10px;
}
"""


def build_stylesheet(colors: ColorConfig | None = None) -> str:
    """Return the application stylesheet for *colors*."""
    colors = colors or ColorConfig()
    return _TEMPLATE % {
        "background": colors.background,
        "primary": colors.primary,
        "accent": colors.accent,
        "marker": colors.marker,
    }
