"""PhysCalc GUI application entry point.

Launch with:
    python -m physcalc.ui.app
    physcalc gui           (via CLI command)
"""

from __future__ import annotations

import sys

from physcalc.core.config import AppSettings


def run(settings: AppSettings | None = None) -> None:
    """Launch the PhysCalc desktop application."""
    from PySide6.QtWidgets import QApplication

    from physcalc import __app_name__
    from physcalc.ui.main_window import MainWindow
    from physcalc.ui.styles.theme import build_stylesheet

    settings = settings or AppSettings()
    app = QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setStyle("Fusion")
    app.setStyleSheet(build_stylesheet(settings.colors))

    window = MainWindow(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
