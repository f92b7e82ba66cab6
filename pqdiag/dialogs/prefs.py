# pqdiag/dialogs/prefs.py
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QDialog, QDialogButtonBox, QFormLayout, QLabel, QLineEdit, QSpinBox, QVBoxLayout
)

from ..models.printer import DEFAULT_HOST, DEFAULT_QUEUE

class PrefsDialog(QDialog):
    def __init__(self, settings: dict, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.settings = settings
        self.setMinimumWidth(560)

        self.host_edit = QLineEdit(str(self.settings["printer_host"]))
        self.port_spin = QSpinBox(); self.port_spin.setRange(1, 65535)
        self.port_spin.setValue(int(self.settings["printer_port"]))
        self.queue_edit = QLineEdit(str(self.settings["queue_name"]))
        self.admin_edit = QLineEdit(self.settings.get("admin_prefix", "sudo"))
        self.admin_edit.setPlaceholderText("e.g. sudo, pkexec; blank to run as current user")
        admin_hint = QLabel("(Used for cupsenable/cupsdisable and restarting CUPS)")

        # Output cleanup
        self.chk_raw = QCheckBox("Show raw output (no cleanup)")
        self.chk_raw.setChecked(self.settings.get("show_raw", False))
        self.chk_strip_global = QCheckBox("Strip ANSI globally")
        self.chk_strip_global.setChecked(self.settings.get("strip_ansi_global", False))
        self.chk_strip_hplip = QCheckBox("Strip ANSI for HPLIP (hp-info)")
        self.chk_strip_hplip.setChecked(self.settings.get("strip_ansi_hplip", True))

        self.log_level = QComboBox(); self.log_level.addItems(["DEBUG", "INFO", "WARNING", "ERROR"])
        self.log_level.setCurrentText(self.settings.get("log_level", "WARNING"))

        form = QFormLayout()
        form.addRow("Printer address:", self.host_edit)
        form.addRow("Raw print port:", self.port_spin)
        form.addRow("CUPS queue:", self.queue_edit)
        form.addRow("Admin prefix:", self.admin_edit); form.addRow("", admin_hint)
        form.addRow("", self.chk_raw)
        form.addRow("", self.chk_strip_global)
        form.addRow("", self.chk_strip_hplip)
        form.addRow("Log level (next start):", self.log_level)

        self.chk_raw.toggled.connect(self._update_sensitivity)
        self.chk_strip_global.toggled.connect(self._update_sensitivity)
        self._update_sensitivity()

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept); buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self); layout.addLayout(form); layout.addWidget(buttons)

    def _update_sensitivity(self):
        raw = self.chk_raw.isChecked()
        self.chk_strip_global.setEnabled(not raw)
        self.chk_strip_hplip.setEnabled(not raw and not self.chk_strip_global.isChecked())

    def get_values(self) -> dict:
        return {
            "printer_host": self.host_edit.text().strip() or DEFAULT_HOST,
            "printer_port": int(self.port_spin.value()),
            "queue_name": self.queue_edit.text().strip() or DEFAULT_QUEUE,
            "admin_prefix": self.admin_edit.text().strip(),
            "show_raw": self.chk_raw.isChecked(),
            "strip_ansi_global": self.chk_strip_global.isChecked(),
            "strip_ansi_hplip": self.chk_strip_hplip.isChecked(),
            "log_level": self.log_level.currentText(),
        }
