from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout,
    QLineEdit, QCheckBox,
    QDialogButtonBox
)
from PySide6.QtGui import QDoubleValidator
from PySide6.QtCore import Qt, QLocale

from core.config import MapSettings


class ConfigDialog(QDialog):
    def __init__(self, settings: MapSettings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Configuraciones")
        self._settings = settings
        self._build_ui()

    def _build_ui(self):
        # Layout principal
        layout = QVBoxLayout(self)

        # Formulario de ajustes
        form = QFormLayout()
        # Ancho del lienzo; el alto sale de la proporción del mapa
        self.width_edit = QLineEdit(f"{self._settings.canvas_width:g}")
        width_validator = QDoubleValidator(1.0, 100000.0, 2, self.width_edit)
        width_validator.setLocale(QLocale.c())  # punto decimal, como espera float()
        self.width_edit.setValidator(width_validator)
        form.addRow("Ancho del lienzo:", self.width_edit)

        # Margen
        self.padding_edit = QLineEdit(f"{self._settings.padding:g}")
        padding_validator = QDoubleValidator(0.0, 10000.0, 2, self.padding_edit)
        padding_validator.setLocale(QLocale.c())
        self.padding_edit.setValidator(padding_validator)
        form.addRow("Margen:", self.padding_edit)

        self.skip_checkbox = QCheckBox()
        self.skip_checkbox.setChecked(self._settings.skip_unsupported)
        form.addRow("Omitir geometrías no soportadas:", self.skip_checkbox)

        layout.addLayout(form)

        # Botones Aceptar / Cancelar
        buttons = QDialogButtonBox(
            QDialogButtonBox.Ok | QDialogButtonBox.Cancel,
            Qt.Horizontal, self
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def get_values(self):
        """
        Devuelve un dict con los valores ingresados,
        tras un exec() exitoso.
        """
        return {
            "canvas_width":     float(self.width_edit.text().strip() or self._settings.canvas_width),
            "padding":          float(self.padding_edit.text().strip() or self._settings.padding),
            "skip_unsupported": self.skip_checkbox.isChecked()
        }

    def get_settings(self) -> MapSettings:
        """Lanza ValueError si los valores no dejan área dibujable."""
        return MapSettings(**self.get_values()).validate()
