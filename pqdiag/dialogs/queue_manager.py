# pqdiag/dialogs/queue_manager.py
from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QHBoxLayout, QLabel, QMessageBox, QPushButton, QSpinBox, QVBoxLayout
)

from ..clients.cups import CupsClient
from ..core.queue_view import QueueViewController
from ..models.job import JobRow
from ..models.output import Style
from ..utils.qt_timer import QtRepeatingTask
from ..widgets.queue_table import QueueTable

class QueueManagerDialog(QDialog):
    """Print queue manager. Presentation only; QueueViewController makes the decisions."""

    def __init__(self, client: CupsClient, settings: dict, log, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Print Queue Manager")
        self.resize(980, 480)
        self.settings = settings
        self._log = log  # callable(Style, str), the main console

        self.spin_refresh = QSpinBox(); self.spin_refresh.setRange(0, 3600)
        self.spin_refresh.setValue(int(settings.get("refresh_seconds", 5)))
        self.spin_age = QSpinBox(); self.spin_age.setRange(0, 1440); self.spin_age.setSingleStep(1)
        self.spin_age.setValue(int(settings.get("highlight_minutes", 10)))
        btn_refresh = QPushButton("Refresh Now")

        controls = QHBoxLayout()
        controls.addWidget(QLabel("Auto-refresh (sec):")); controls.addWidget(self.spin_refresh)
        controls.addWidget(QLabel("Highlight older than (min):")); controls.addWidget(self.spin_age)
        controls.addStretch(); controls.addWidget(btn_refresh)

        self.status = QLabel(""); self.status.setWordWrap(True)
        self.table = QueueTable()

        btn_cancel_sel = QPushButton("Cancel Selected Job")
        btn_cancel_user = QPushButton("Cancel All From Selected User")
        btn_cancel_all = QPushButton("Cancel ALL Jobs")
        btn_pause = QPushButton("Pause Queue")
        btn_resume = QPushButton("Resume Queue")
        actions = QHBoxLayout()
        for b in (btn_cancel_sel, btn_cancel_user, btn_cancel_all): actions.addWidget(b)
        actions.addStretch()
        for b in (btn_pause, btn_resume): actions.addWidget(b)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)

        v = QVBoxLayout(self)
        v.addLayout(controls); v.addWidget(self.status); v.addWidget(self.table, 1)
        v.addLayout(actions); v.addWidget(buttons)

        self.controller = QueueViewController(
            client, self, QtRepeatingTask(self),
            threshold_minutes=self.spin_age.value(),
            refresh_seconds=self.spin_refresh.value(),
        )

        btn_refresh.clicked.connect(self.controller.refresh)
        btn_cancel_sel.clicked.connect(lambda: self.controller.cancel(self.table.selected_job_id()))
        btn_cancel_user.clicked.connect(lambda: self.controller.cancel_owner(self.table.selected_owner()))
        btn_cancel_all.clicked.connect(self.controller.cancel_all)
        btn_pause.clicked.connect(self.controller.pause)
        btn_resume.clicked.connect(self.controller.resume)
        self.spin_refresh.valueChanged.connect(self._on_refresh_changed)
        self.spin_age.valueChanged.connect(self._on_threshold_changed)

        self.controller.start()

    # QueuePresenter
    def show_status(self, text: str, disabled: bool) -> None:
        self.status.setText(text)
        self.status.setStyleSheet("color:#c62828; font-weight:600;" if disabled else "font-weight:600;")

    def show_jobs(self, rows: list[JobRow]) -> None:
        self.table.set_rows(rows)

    def confirm(self, title: str, message: str) -> bool:
        resp = QMessageBox.question(self, title, message, QMessageBox.Ok | QMessageBox.Cancel, QMessageBox.Cancel)
        return resp == QMessageBox.Ok

    def notify(self, style: Style, message: str) -> None:
        self._log(style, message)

    def _on_refresh_changed(self, value: int):
        self.settings["refresh_seconds"] = value
        self.controller.set_refresh_period(value)

    def _on_threshold_changed(self, value: int):
        self.settings["highlight_minutes"] = value
        self.controller.set_threshold(value)

    def done(self, r):
        self.controller.close()
        super().done(r)
