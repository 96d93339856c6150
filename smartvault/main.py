"""
Main entry point for the SmartVault Password Manager.

DEMO NOTICE:
Records are kept in memory only and the PIN gate is not authentication.
"""

import sys
import signal
import logging
from typing import Optional
from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt

from smartvault.ui import MainWindow
from smartvault.session import VaultSession
from smartvault.storage import RecordStore
from smartvault.samples import sample_records
from smartvault import config

logger = logging.getLogger(__name__)


class PasswordManagerApp:
    """Main application class for the password manager."""

    def __init__(self):
        """Initialize the application."""
        self.app = QApplication(sys.argv)
        self.app.setApplicationName(config.APP_NAME)
        self.app.setOrganizationName(config.APP_NAME)
        self.app.setStyle(config.APP_STYLE)

        store = RecordStore(sample_records() if config.LOAD_SAMPLE_DATA else None)
        self.session = VaultSession(store)
        self.main_window: Optional[MainWindow] = None

        # Handle Ctrl+C gracefully
        signal.signal(signal.SIGINT, signal.SIG_DFL)

    def run(self) -> int:
        """Run the application."""
        logger.info(f"Starting {config.APP_TITLE_PREFIX} with {len(self.session.store)} records")
        self.main_window = MainWindow(self.session)
        self.main_window.show()
        return self.app.exec_()


def main():
    """Main entry point."""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    # Enable high DPI scaling
    if hasattr(Qt, 'AA_EnableHighDpiScaling'):
        QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    if hasattr(Qt, 'AA_UseHighDpiPixmaps'):
        QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    app = PasswordManagerApp()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
