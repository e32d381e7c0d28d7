from __future__ import annotations

import sys

from PyQt6.QtWidgets import QApplication

from ..bootstrap import configure_logging
from ..config import AppPalette, get_settings
from ..services.context import ServiceContext
from .main_window import MainWindow
from .styles.theme import apply_palette


def run_gui() -> None:
    configure_logging()
    app = QApplication.instance() or QApplication(sys.argv)
    settings = get_settings()
    app.setApplicationName(settings.ui.app_name)
    app.setOrganizationName(settings.ui.organization)
    apply_palette(app, AppPalette())

    context = ServiceContext(settings=settings)
    window = MainWindow(orchestrator=context.orchestrator, settings=settings, storage_name=context.storage.name)
    window.show()
    try:
        exit_code = app.exec()
    finally:
        context.close()
    sys.exit(exit_code)
