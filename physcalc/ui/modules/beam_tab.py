"""Beam statics tab for PhysCalc GUI."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from physcalc.core.beam import LoadType, SupportType
from physcalc.core.config import AppSettings
from physcalc.core.facade import (
    BEAM_FIELDS,
    DEFAULT_BEAM_INPUTS,
    DEFAULT_BEAM_UNITS,
    CalculationFacade,
    beam_fields,
)
from physcalc.ui.widgets.plot_widget import PlotCanvas
from physcalc.ui.widgets.result_display import ResultTable
from physcalc.ui.widgets.unit_input import UnitForm
from physcalc.viz.beam_curve import deflection_curve
from physcalc.viz.render import draw_beam_curve

_SUPPORTS = [("Simply supported", SupportType.SIMPLY_SUPPORTED), ("Cantilever", SupportType.CANTILEVER)]
_LOADS = [("Point load", LoadType.POINT), ("Uniform load (UDL)", LoadType.UNIFORM)]


class BeamTab(QWidget):
    def __init__(
        self,
        facade: CalculationFacade,
        settings: AppSettings,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._facade = facade
        self._settings = settings

        splitter = QSplitter()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(splitter)

        # --- Left: inputs ---
        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(4, 4, 4, 4)

        selectors = QFormLayout()
        self.support = QComboBox()
        for label, value in _SUPPORTS:
            self.support.addItem(label, value.value)
        self.load = QComboBox()
        for label, value in _LOADS:
            self.load.addItem(label, value.value)
        selectors.addRow("Support", self.support)
        selectors.addRow("Load", self.load)
        left_layout.addLayout(selectors)

        self.form = UnitForm()
        for field_id, descriptor in BEAM_FIELDS.items():
            self.form.add_field(
                descriptor,
                text=DEFAULT_BEAM_INPUTS[field_id],
                unit=DEFAULT_BEAM_UNITS[field_id],
            )
        left_layout.addWidget(self.form)
        left_layout.addStretch()

        btn = QPushButton("Solve Beam")
        btn.clicked.connect(self._compute)
        left_layout.addWidget(btn)

        self.status = QLabel()
        self.status.setWordWrap(True)
        left_layout.addWidget(self.status)

        # --- Right: results ---
        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(4, 4, 4, 4)
        self.results = ResultTable("Beam Results")
        right_layout.addWidget(self.results)
        self.canvas = PlotCanvas(figsize=(5.0, 2.0), facecolor=settings.colors.background)
        right_layout.addWidget(self.canvas)

        splitter.addWidget(left)
        splitter.addWidget(right)
        splitter.setSizes([350, 650])

        self.support.currentIndexChanged.connect(self._on_case_changed)
        self.load.currentIndexChanged.connect(self._on_case_changed)
        self._on_case_changed()

    def _case(self) -> tuple[SupportType, LoadType]:
        return SupportType(self.support.currentData()), LoadType(self.load.currentData())

    def _on_case_changed(self, _index: int = 0) -> None:
        support, load = self._case()
        active = {f.id for f in beam_fields(load)}
        for field_id in BEAM_FIELDS:
            self.form.set_field_visible(field_id, field_id in active)
        self.results.clear()
        self._paint(deflection_curve(support, load, colors=self._settings.colors))

    def _compute(self) -> None:
        support, load = self._case()
        report = self._facade.solve_beam(support, load, self.form.raw_values(), self.form.units())
        self.form.mark_invalid(report.field_id)
        if not report.ok:
            self.results.clear()
            self.status.setText(report.error)
            return
        self.results.set_data(report.rows)
        self.status.setText("\n".join(report.warnings))
        self._paint(deflection_curve(support, load, report.result, colors=self._settings.colors))

    def _paint(self, frame) -> None:
        draw_beam_curve(self.canvas.ax, frame, background=self._settings.colors.background)
        self.canvas.redraw()
