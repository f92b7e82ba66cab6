# pqdiag/widgets/queue_table.py
from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import QAbstractItemView, QHeaderView, QTreeWidget, QTreeWidgetItem

from ..core.age import age_sort_key
from ..models.job import JobRow

STALE_COLOR = "#3b2f1b"
COLUMNS = ["Job ID", "User", "Age", "Status", "File"]
AGE_COLUMN = COLUMNS.index("Age")

class _JobItem(QTreeWidgetItem):
    def __lt__(self, other):
        col = self.treeWidget().sortColumn() if self.treeWidget() else -1
        mine, theirs = self.data(0, Qt.UserRole), other.data(0, Qt.UserRole)
        if col == AGE_COLUMN and isinstance(mine, JobRow) and isinstance(theirs, JobRow):
            return age_sort_key(mine) < age_sort_key(theirs)
        return super().__lt__(other)

class QueueTable(QTreeWidget):
    def __init__(self, *a, **kw):
        super().__init__(*a, **kw)
        self.setColumnCount(len(COLUMNS))
        self.setHeaderLabels(COLUMNS)
        self.setRootIsDecorated(False)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setUniformRowHeights(True)
        self.setSortingEnabled(True)
        self.sortByColumn(-1, Qt.AscendingOrder)  # listing order until a header is clicked

        hdr = self.header()
        hdr.setStretchLastSection(True)
        for i, w in enumerate((220, 120, 90, 320)):
            hdr.setSectionResizeMode(i, QHeaderView.Interactive)
            self.setColumnWidth(i, w)

    def set_rows(self, rows: list[JobRow]):
        keep = self.selected_job_id()
        self.setUpdatesEnabled(False)
        try:
            self.clear()
            for row in rows:
                job = row.job
                item = _JobItem([job.job_id, job.owner, row.age_label, job.status_text, job.file_label])
                item.setData(0, Qt.UserRole, row)
                item.setToolTip(3, job.status_text)
                if row.stale:
                    for col in range(len(COLUMNS)):
                        item.setBackground(col, QBrush(QColor(STALE_COLOR)))
                        item.setForeground(col, QBrush(QColor("white")))
                self.addTopLevelItem(item)
                if keep and job.job_id == keep:
                    item.setSelected(True)
                    self.setCurrentItem(item)
        finally:
            self.setUpdatesEnabled(True)

    def selected_row(self) -> JobRow | None:
        if not (item := self.currentItem()) or not item.isSelected():
            return None
        row = item.data(0, Qt.UserRole)
        return row if isinstance(row, JobRow) else None

    def selected_job_id(self) -> str | None:
        return row.job_id if (row := self.selected_row()) else None

    def selected_owner(self) -> str | None:
        return row.owner if (row := self.selected_row()) else None
