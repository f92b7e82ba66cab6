# pqdiag/main_window.py
from datetime import datetime
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QCheckBox, QDialog, QFileDialog, QHBoxLayout, QLabel, QMainWindow, QPushButton, QSpinBox,
    QSplitter, QVBoxLayout, QWidget
)

from .clients.cups import CupsClient
from .core.wake import MAX_INTERVAL, MIN_INTERVAL, WakeScheduler
from .dialogs.prefs import PrefsDialog
from .dialogs.queue_manager import QueueManagerDialog
from .models.output import Style
from .models.printer import PrinterConfig
from .net.probes import send_status_query
from .utils.commands import CommandRunner
from .utils.qt_timer import QtRepeatingTask
from .utils.settings import load_settings, save_settings
from .widgets.output_console import OutputConsole
from .workers.diagnostics import Diagnostics

class MainWindow(QMainWindow):
    def __init__(self, settings: dict | None = None):
        super().__init__()
        self.setWindowTitle("Printer Diagnostic Tool")
        self.settings = settings if settings is not None else load_settings()
        if ws := self.settings.get("window_size"):
            self.resize(int(ws[0]), int(ws[1]))
        else:
            self.resize(1100, 720)

        self.console = OutputConsole()
        self.runner = CommandRunner(self.settings)
        self._build_backend()

        # Wake bar
        self.chk_wake = QCheckBox("Enable Continuous Wake Mode")
        self.spin_wake = QSpinBox(); self.spin_wake.setRange(MIN_INTERVAL, MAX_INTERVAL)
        self.spin_wake.setValue(int(self.settings.get("wake_interval_minutes", 5)))
        self.lbl_wake = QLabel("")
        self.btn_export = QPushButton("Export Output"); self.btn_export.clicked.connect(self.export_output)
        wake = QHBoxLayout()
        wake.addWidget(self.chk_wake); wake.addWidget(QLabel("Wake interval (min):")); wake.addWidget(self.spin_wake)
        wake.addWidget(self.lbl_wake, 1); wake.addWidget(self.btn_export)

        self.wake = WakeScheduler(
            QtRepeatingTask(self), self._wake_silent, self.spin_wake.value(),
            on_wake=self._update_wake_ui)

        # Left panel
        left = QWidget(); lv = QVBoxLayout(left)
        self.lbl_printer = QLabel(); self.lbl_queue = QLabel(); self.lbl_addr = QLabel()
        for lbl in (self.lbl_printer, self.lbl_queue, self.lbl_addr): lv.addWidget(lbl)

        def section(title, entries):
            lbl = QLabel(title); lbl.setStyleSheet("font-weight:600; margin-top:8px;")
            lv.addWidget(lbl)
            for text, slot in entries:
                b = QPushButton(text); b.clicked.connect(slot); lv.addWidget(b)

        section("DIAGNOSTICS:", [
            ("1. Quick Test (ping + port check)", self.on_quick_test),
            ("2. Full Diagnostic Scan", self.on_full_scan),
            ("3. Check CUPS Status", lambda: self._run_step("CUPS Status Check", self.diag.check_cups_status)),
            ("4. Check for Stuck Jobs", lambda: self._run_step("Stuck Jobs Check", self.diag.check_stuck_jobs)),
            ("5. Check Plugin Version", lambda: self._run_step("Plugin Version Check", self.diag.check_plugin_version)),
            ("6. Get Printer Info (HPLIP)", lambda: self._run_step("Printer Info (HPLIP)", self.diag.printer_info)),
        ])
        section("FIXES:", [
            ("7. Clear Stuck Jobs", lambda: self._run_step("Clear Stuck Jobs", self.diag.clear_stuck_jobs)),
            ("8. Send Wake Command to Printer", self.on_wake_command),
            ("9. Restart CUPS Service", lambda: self._run_step("Restart CUPS", self.diag.restart_service)),
            ("10. Print Test Page", lambda: self._run_step("Print Test Page", self.diag.print_test_page)),
        ])
        section("OTHER:", [
            ("11. Manage Print Queue", self.open_queue_manager),
            ("0. Exit", self.close),
        ])
        lv.addStretch()

        split = QSplitter(Qt.Horizontal)
        split.addWidget(left); split.addWidget(self.console)
        split.setSizes([320, 780])

        central = QWidget(); v = QVBoxLayout(central)
        v.addLayout(wake); v.addWidget(split, 1)
        self.setCentralWidget(central)

        m = self.menuBar().addMenu("&Options")
        act_prefs = QAction("Preferences…", self); act_prefs.triggered.connect(self.open_prefs); m.addAction(act_prefs)

        self.chk_wake.toggled.connect(self._on_wake_toggled)
        self.spin_wake.valueChanged.connect(self._on_wake_interval)
        self.chk_wake.setChecked(bool(self.settings.get("wake_enabled", False)))
        self._update_wake_ui()
        self._refresh_printer_labels()

    def _build_backend(self):
        self.config = PrinterConfig.from_settings(self.settings)
        self.client = CupsClient(self.config, self.runner)
        self.diag = Diagnostics(self.config, self.client, self.runner, self.console.write)

    def _refresh_printer_labels(self):
        self.lbl_printer.setText(f"Printer: {self.client.friendly_name()}")
        self.lbl_queue.setText(f"CUPS Queue: {self.config.queue_name}")
        self.lbl_addr.setText(f"IP Address: {self.config.host}   Port: {self.config.port}")

    def closeEvent(self, e):
        self.wake.disable()
        self.settings["window_size"] = [self.width(), self.height()]
        save_settings(self.settings)
        super().closeEvent(e)

    # -- diagnostics ---------------------------------------------------------

    def _run_step(self, title: str, step):
        self.console.clear()
        self.diag.header(title)
        step()

    def on_quick_test(self):
        self.console.clear(); self.diag.quick_test()

    def on_full_scan(self):
        self.console.clear()
        self.diag.wake_mode_enabled = self.wake.enabled
        self.diag.full_scan()

    def on_wake_command(self):
        self._run_step("Send Wake Command", self.diag.send_wake)
        if self.wake.enabled:
            self.wake.record_wake()

    def open_queue_manager(self):
        self.console.clear()
        self.diag.header("Manage Print Queue")
        self.console.write(Style.INFO, "Opening print queue manager...")
        dlg = QueueManagerDialog(self.client, self.settings, self.console.write, self)
        dlg.exec()
        save_settings(self.settings)

    def export_output(self):
        name = f"printer_diagnostic_{datetime.now():%Y%m%d_%H%M%S}.txt"
        f, _ = QFileDialog.getSaveFileName(self, "Export Diagnostic Output", str(Path.home() / name), "Text (*.txt);;All files (*)")
        if not f:
            return
        try:
            Path(f).write_text(self.console.toPlainText(), encoding="utf-8")
        except OSError as e:
            self.console.write(Style.ERROR, f"Failed to write export file: {e}")
            return
        self.console.write(Style.SUCCESS, f"Exported output to: {f}")

    # -- continuous wake -----------------------------------------------------

    def _wake_silent(self) -> bool:
        return send_status_query(self.config.host, self.config.port)

    def _on_wake_toggled(self, on: bool):
        if on: self.wake.enable(self.spin_wake.value())
        else: self.wake.disable()
        self.settings["wake_enabled"] = on
        save_settings(self.settings)
        self._update_wake_ui()

    def _on_wake_interval(self, value: int):
        self.wake.set_interval(value)
        self.settings["wake_interval_minutes"] = value
        save_settings(self.settings)
        self._update_wake_ui()

    def _update_wake_ui(self):
        self.spin_wake.setEnabled(self.chk_wake.isChecked())
        text = self.wake.status_text()
        color = "#2e7d32" if self.wake.enabled else "#c62828"
        self.lbl_wake.setText(text)
        self.lbl_wake.setStyleSheet(f"color:{color};")

    def open_prefs(self):
        dlg = PrefsDialog(self.settings, self)
        if dlg.exec() == QDialog.Accepted:
            self.settings.update(dlg.get_values())
            save_settings(self.settings)
            self._build_backend()
            self._refresh_printer_labels()
            self.console.write(Style.INFO, "Saved preferences.")
