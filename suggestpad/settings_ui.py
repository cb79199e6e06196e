"""Autocomplete settings dialog (Qt)."""
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QGroupBox,
    QFormLayout, QSpinBox, QDoubleSpinBox, QPushButton,
)

from suggestpad.engine import EngineConfig


class SettingsDialog(QDialog):
    """Edits the engine tuning. Accepting does not apply anything by itself."""

    def __init__(self, engine_config: EngineConfig, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Autocomplete Settings")
        self.setModal(True)
        self.setMinimumWidth(320)

        layout = QVBoxLayout(self)

        # === Suggestions ===
        suggest_group = QGroupBox("Suggestions")
        suggest_layout = QFormLayout(suggest_group)

        self._max_spin = QSpinBox()
        self._max_spin.setRange(1, 50)
        self._max_spin.setValue(engine_config.max_suggestions)
        suggest_layout.addRow("Maximum suggestions:", self._max_spin)

        layout.addWidget(suggest_group)

        # === Typo tolerance ===
        tolerance_group = QGroupBox("Typo tolerance")
        tolerance_layout = QFormLayout(tolerance_group)

        self._threshold_spin = QSpinBox()
        self._threshold_spin.setRange(0, 100)
        self._threshold_spin.setValue(engine_config.tolerance_threshold)
        tolerance_layout.addRow("Tolerance threshold:", self._threshold_spin)

        self._tolerance_spin = QSpinBox()
        self._tolerance_spin.setRange(0, 10)
        self._tolerance_spin.setValue(engine_config.tolerance)
        tolerance_layout.addRow("Tolerance:", self._tolerance_spin)

        layout.addWidget(tolerance_group)

        # === Ranking ===
        weight_group = QGroupBox("Ranking")
        weight_layout = QFormLayout(weight_group)

        self._similar_spin = self._weight_spin(engine_config.similar_weight)
        weight_layout.addRow("Similar weight:", self._similar_spin)

        self._original_spin = self._weight_spin(engine_config.original_weight)
        weight_layout.addRow("Original weight:", self._original_spin)

        layout.addWidget(weight_group)

        # === Buttons ===
        btn_row = QHBoxLayout()
        apply_btn = QPushButton("Apply")
        apply_btn.setDefault(True)
        apply_btn.clicked.connect(self.accept)
        btn_row.addWidget(apply_btn)

        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(cancel_btn)

        layout.addLayout(btn_row)

    @staticmethod
    def _weight_spin(value: float) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        spin.setRange(0.0, 2.0)
        spin.setSingleStep(0.1)
        spin.setDecimals(2)
        spin.setValue(value)
        return spin

    def engine_config(self) -> EngineConfig:
        return EngineConfig(
            max_suggestions=self._max_spin.value(),
            tolerance_threshold=self._threshold_spin.value(),
            tolerance=self._tolerance_spin.value(),
            similar_weight=self._similar_spin.value(),
            original_weight=self._original_spin.value(),
        )
