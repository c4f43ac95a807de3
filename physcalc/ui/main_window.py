"""Main application window for PhysCalc GUI."""

from __future__ import annotations

from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QSplitter,
    QStatusBar,
    QTabWidget,
    QWidget,
)

from physcalc import __app_name__, __version__
from physcalc.core.config import AppSettings
from physcalc.core.facade import CalculationFacade
from physcalc.core.history import HistoryLog
from physcalc.ui.modules.beam_tab import BeamTab
from physcalc.ui.modules.fluid_tab import FluidTab
from physcalc.ui.widgets.result_display import HistoryPanel


class MainWindow(QMainWindow):
    """PhysCalc main application window.

    Fluid and beam calculators in tabs, with a shared history panel that
    every calculation is recorded to.
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.settings = settings or AppSettings()

        self.setWindowTitle(f"{__app_name__} v{__version__}")
        self.setMinimumSize(1000, 650)
        self.resize(1300, 800)

        self.history = HistoryPanel(HistoryLog(limit=self.settings.history_limit))
        facade = CalculationFacade(history=self.history)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(4, 4, 4, 4)
        splitter = QSplitter()
        layout.addWidget(splitter)

        self.tabs = QTabWidget()
        self.tabs.setDocumentMode(True)
        self.fluid_tab = FluidTab(facade, self.settings)
        self.beam_tab = BeamTab(facade, self.settings)
        self.tabs.addTab(self.fluid_tab, "Fluid Dynamics")
        self.tabs.addTab(self.beam_tab, "Beam Statics")
        self.tabs.currentChanged.connect(self._on_tab_changed)

        splitter.addWidget(self.tabs)
        splitter.addWidget(self.history)
        splitter.setSizes([1000, 300])

        self.status = QStatusBar()
        self.setStatusBar(self.status)
        self.status.showMessage(f"{__app_name__} v{__version__}: Ready")

        self._build_menu()

    def _build_menu(self) -> None:
        menu = self.menuBar()

        file_menu = menu.addMenu("&File")
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        help_menu = menu.addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _on_tab_changed(self, index: int) -> None:
        # Animate only while the fluid panel is visible.
        if self.tabs.widget(index) is self.fluid_tab:
            self.fluid_tab.loop.start()
        else:
            self.fluid_tab.loop.stop()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.fluid_tab.shutdown()
        super().closeEvent(event)

    def _show_about(self) -> None:
        from PySide6.QtWidgets import QMessageBox

        QMessageBox.about(
            self,
            f"About {__app_name__}",
            f"<h3>{__app_name__} v{__version__}</h3>"
            f"<p>Engineering calculators with live visualization.</p>"
            f"<p>Fluid dynamics formulas and closed-form beam statics.</p>",
        )
