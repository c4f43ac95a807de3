"""Fluid dynamics tab for PhysCalc GUI."""

from __future__ import annotations

import logging

import numpy as np
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from physcalc.core.config import AppSettings
from physcalc.core.facade import CalculationFacade
from physcalc.core.formulas import FormulaKey, get_formula, list_formulas
from physcalc.ui.scheduler import QtScheduler
from physcalc.ui.widgets.plot_widget import PlotCanvas
from physcalc.ui.widgets.unit_input import UnitForm
from physcalc.viz.engine import VisualizationEngine, VisualizationFrame
from physcalc.viz.loop import AnimationLoop
from physcalc.viz.render import draw_frame

logger = logging.getLogger(__name__)


class FluidTab(QWidget):
    def __init__(
        self,
        facade: CalculationFacade,
        settings: AppSettings,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._facade = facade
        self._settings = settings
        self._result: str | None = None

        splitter = QSplitter()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(splitter)

        # --- Left: inputs ---
        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(4, 4, 4, 4)

        self.selector = QComboBox()
        for key in list_formulas():
            self.selector.addItem(get_formula(key).name, key.value)
        self.selector.currentIndexChanged.connect(self._on_formula_changed)
        left_layout.addWidget(self.selector)

        self.description = QLabel()
        self.description.setWordWrap(True)
        left_layout.addWidget(self.description)

        self.form = UnitForm()
        left_layout.addWidget(self.form)
        left_layout.addStretch()

        btn = QPushButton("Calculate")
        btn.clicked.connect(self._compute)
        left_layout.addWidget(btn)

        self.result_label = QLabel("-")
        self.result_label.setObjectName("result")
        self.result_label.setWordWrap(True)
        left_layout.addWidget(self.result_label)

        # --- Right: visualization ---
        self.canvas = PlotCanvas(facecolor=settings.colors.background)
        splitter.addWidget(left)
        splitter.addWidget(self.canvas)
        splitter.setSizes([350, 650])

        self.engine = VisualizationEngine(
            self.current_key.value,
            colors=settings.colors,
            width=settings.canvas_width,
            height=settings.canvas_height,
            particle_count=settings.particle_count,
            rng=np.random.default_rng(settings.seed),
        )
        self.loop = AnimationLoop(
            self.engine,
            source=self._latest_inputs,
            scheduler=QtScheduler(self),
            sink=self._paint,
            interval=settings.frame_interval,
        )
        self._build_form()
        self.loop.start()

    @property
    def current_key(self) -> FormulaKey:
        return FormulaKey(self.selector.currentData())

    def _build_form(self) -> None:
        formula = get_formula(self.current_key)
        self.description.setText(formula.description)
        self.form.clear_fields()
        for f in formula.fields:
            self.form.add_field(f)
        self._result = None
        self.result_label.setText("-")

    def _on_formula_changed(self, _index: int) -> None:
        self.loop.stop()
        self._build_form()
        self.engine.set_mode(self.current_key.value)
        self.loop.start()

    def _compute(self) -> None:
        report = self._facade.calculate(self.current_key, self.form.raw_values(), self.form.units())
        self.form.mark_invalid(report.field_id)
        self.result_label.setText(report.display)
        self._result = report.display if report.ok else None

    def _latest_inputs(self) -> tuple[dict[str, str], str | None]:
        return self.form.raw_values(), self._result

    def _paint(self, frame: VisualizationFrame) -> None:
        draw_frame(self.canvas.ax, frame, background=self._settings.colors.background)
        self.canvas.redraw()

    def shutdown(self) -> None:
        """Stop the animation; called when the window closes."""
        self.loop.stop()
