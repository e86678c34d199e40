import sys

from PySide6 import QtAsyncio
from PySide6.QtWidgets import QApplication

from taskboard.core.logging import configure_logging
from taskboard.core.settings import get_settings
from taskboard.ui.main_windows import MainWindow


def main() -> int:
    configure_logging(get_settings().LOG_LEVEL)
    app = QApplication(sys.argv)
    win = MainWindow()
    win.resize(900, 700)
    win.show()
    # Qt drives the asyncio loop, so awaited HTTP calls never block painting.
    QtAsyncio.run(handle_sigint=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
