# pqdiag/widgets/output_console.py
import html

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QTextEdit

from ..models.output import Style

_PREFIX = {Style.SUCCESS: "✓ ", Style.ERROR: "✗ ", Style.WARNING: "⚠ ", Style.INFO: "ℹ "}
_CSS = {
    Style.HEADER: "color:#00bcd4; font-weight:600;",
    Style.SUCCESS: "color:#2e7d32;",
    Style.ERROR: "color:#c62828;",
    Style.WARNING: "color:#b58900;",
    Style.INFO: "color:#1565c0;",
    Style.PLAIN: "",
}

class OutputConsole(QTextEdit):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setPlaceholderText("Diagnostic output will appear here…")

    def write(self, style: Style, text: str):
        body = html.escape(_PREFIX.get(style, "") + text).replace("\n", "<br>")
        cur = self.textCursor()
        cur.movePosition(QTextCursor.End)
        cur.insertHtml(f'<span style="white-space:pre-wrap; {_CSS[style]}">{body}</span><br>')
        self.setTextCursor(cur)
        self.ensureCursorVisible()
