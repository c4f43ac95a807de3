"""Result and history display widgets for PhysCalc GUI."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHeaderView,
    QLabel,
    QListWidget,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from physcalc.core.history import HistoryLog


class ResultTable(QWidget):
    """Two-column result table: Quantity | Value."""

    def __init__(self, title: str = "Results", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QLabel(f"<b>{title}</b>"))

        self._table = QTableWidget()
        self._table.setColumnCount(2)
        self._table.setHorizontalHeaderLabels(["Quantity", "Value"])
        self._table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self._table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setAlternatingRowColors(True)
        self._table.verticalHeader().setVisible(False)
        layout.addWidget(self._table)

    def clear(self) -> None:
        self._table.setRowCount(0)

    def set_data(self, rows: list[tuple[str, str]]) -> None:
        self._table.setRowCount(len(rows))
        for i, (name, value) in enumerate(rows):
            value_item = QTableWidgetItem(value)
            value_item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self._table.setItem(i, 0, QTableWidgetItem(name))
            self._table.setItem(i, 1, value_item)


class HistoryPanel(QWidget):
    """Newest-first list of recorded calculations.

    Acts as the facade's history sink: records go to the wrapped
    :class:`HistoryLog` and the list is refreshed.
    """

    def __init__(self, log: HistoryLog, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._log = log
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QLabel("<b>History</b>"))

        self._list = QListWidget()
        self._list.setWordWrap(True)
        layout.addWidget(self._list)

        clear_btn = QPushButton("Clear")
        clear_btn.setProperty("secondary", True)
        clear_btn.clicked.connect(self.clear)
        layout.addWidget(clear_btn)

    def record(self, expression: str, result: str) -> None:
        self._log.record(expression, result)
        self._refresh()

    def clear(self) -> None:
        self._log.clear()
        self._refresh()

    def _refresh(self) -> None:
        self._list.clear()
        for item in self._log.items():
            stamp = item.timestamp.strftime("%H:%M:%S")
            self._list.addItem(f"[{stamp}] {item.expression}\n  = {item.result}")
