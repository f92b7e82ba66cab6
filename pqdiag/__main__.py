# pqdiag/__main__.py
import logging
import sys

from PySide6.QtWidgets import QApplication

from .main_window import MainWindow
from .utils.settings import load_settings

def main() -> int:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, str(settings.get("log_level", "WARNING")).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setApplicationName("Printer Diagnostic Tool")
    win = MainWindow(settings)
    win.show()
    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
