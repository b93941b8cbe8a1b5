"""Application entry point for Geocraft."""

from __future__ import annotations

import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from geocraft.constants.about import APP_NAME, APP_VERSION
from geocraft.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from geocraft.core.game_manager import GameManager
from geocraft.server.api_server import start_api_server
from geocraft.ui.main_window import GeocraftMainWindow
from geocraft.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, start the leaderboard API, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting %s %s", APP_NAME, APP_VERSION)

    app = QApplication(sys.argv)
    # Post-answer delays run on the Qt event loop.
    game_manager = GameManager(scheduler=QTimer.singleShot)
    start_api_server(game_manager=game_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)

    window = GeocraftMainWindow(game_manager=game_manager)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
