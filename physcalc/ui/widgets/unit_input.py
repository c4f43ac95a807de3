"""Text-plus-unit input form for PhysCalc GUI.

Each row is a free-text field (parsed by the facade, never by the widget)
next to a combo box of the units allowed for that field.
"""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QWidget,
)

from physcalc.core.formulas import FieldDescriptor


class UnitForm(QWidget):
    """Form of unit-aware text fields.

    Usage::

        form = UnitForm()
        for f in get_formula("reynolds").fields:
            form.add_field(f)
        raw, units = form.raw_values(), form.units()
    """

    value_changed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._layout = QFormLayout(self)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(4)
        self._edits: dict[str, QLineEdit] = {}
        self._combos: dict[str, QComboBox] = {}
        self._rows: dict[str, QWidget] = {}

    def add_field(self, descriptor: FieldDescriptor, text: str = "", unit: str | None = None) -> None:
        """Add a text field with its unit selector."""
        edit = QLineEdit(text)
        edit.setPlaceholderText(descriptor.placeholder)
        edit.setMinimumWidth(120)
        edit.textChanged.connect(lambda _: self.value_changed.emit())

        combo = QComboBox()
        combo.addItems(list(descriptor.allowed_units))
        combo.setCurrentText(unit or descriptor.default_unit)
        combo.currentTextChanged.connect(lambda _: self.value_changed.emit())

        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(0, 0, 0, 0)
        row_layout.addWidget(edit, stretch=1)
        row_layout.addWidget(combo)

        self._layout.addRow(descriptor.label, row)
        self._edits[descriptor.id] = edit
        self._combos[descriptor.id] = combo
        self._rows[descriptor.id] = row

    def clear_fields(self) -> None:
        """Remove every row."""
        while self._layout.rowCount():
            self._layout.removeRow(0)
        self._edits.clear()
        self._combos.clear()
        self._rows.clear()

    def set_field_visible(self, field_id: str, visible: bool) -> None:
        self._layout.setRowVisible(self._rows[field_id], visible)

    def raw_values(self) -> dict[str, str]:
        """Current text of every field, unparsed."""
        return {k: e.text() for k, e in self._edits.items()}

    def units(self) -> dict[str, str]:
        return {k: c.currentText() for k, c in self._combos.items()}

    def mark_invalid(self, field_id: str | None) -> None:
        """Highlight *field_id* (or nothing when None)."""
        for k, edit in self._edits.items():
            edit.setProperty("invalid", k == field_id)
            edit.style().unpolish(edit)
            edit.style().polish(edit)
