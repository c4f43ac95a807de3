"""Matplotlib-based canvas widget for PySide6."""

from __future__ import annotations

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from PySide6.QtWidgets import QVBoxLayout, QWidget


class PlotCanvas(QWidget):
    """Embeddable matplotlib figure with a single full-bleed axes.

    Drawing is left to :mod:`physcalc.viz.render`; call :meth:`redraw`
    after painting.
    """

    def __init__(
        self,
        parent: QWidget | None = None,
        figsize: tuple[float, float] = (6.0, 3.0),
        facecolor: str = "#020617",
    ) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._figure = Figure(figsize=figsize, dpi=100, facecolor=facecolor)
        self._canvas = FigureCanvas(self._figure)
        layout.addWidget(self._canvas)
        self._ax = self._figure.add_axes((0, 0, 1, 1))

    @property
    def ax(self):
        return self._ax

    @property
    def figure(self):
        return self._figure

    def redraw(self) -> None:
        self._canvas.draw_idle()
