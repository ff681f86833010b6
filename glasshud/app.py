"""Application entry point and setup for the Glass HUD typing test."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from glasshud.core.controller import SessionController
from glasshud.core.corpus import CorpusRepository, TextGenerator
from glasshud.core.settings import load_settings
from glasshud.ui.main_window import MainWindow
from glasshud.ui.qt_scheduler import QtScheduler


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, load resources, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Glass HUD")
    app.setApplicationDisplayName("Glass HUD")

    settings = load_settings()
    corpus = CorpusRepository().corpus
    generator = TextGenerator(corpus, chars_per_minute=settings.chars_per_minute_budget)
    scheduler = QtScheduler(app)
    controller = SessionController(generator, settings, scheduler)

    window = MainWindow(controller)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(1100, geometry.width()), min(720, geometry.height()))
    window.show()
    logging.info("Glass HUD typing engine initialized")

    sys.exit(app.exec())
