from __future__ import annotations

import asyncio
import logging
import sys

from PyQt6.QtWidgets import QApplication

from ..assistant import AssistantBridge
from ..bootstrap import configure_logging
from ..config import AppPalette, get_settings
from ..integrations import AdapterSession, fetch_provider_config
from ..presentation import CalendarController
from .main_window import MainWindow
from .styles.theme import apply_palette

logger = logging.getLogger(__name__)


def run_gui() -> None:
    configure_logging()
    app = QApplication.instance() or QApplication(sys.argv)
    settings = get_settings()
    palette = AppPalette()
    apply_palette(app, palette)

    remote = asyncio.run(fetch_provider_config(settings.api.base_url))
    controller = CalendarController(
        bridge=AssistantBridge(settings.api.base_url, timeout=settings.api.timeout),
        adapter_session=AdapterSession.from_settings(settings.provider, remote=remote),
        locale=settings.ui.locale,
        seed=True,
    )
    logger.info("Starting %s with %d seeded event(s)", settings.ui.app_name, len(controller.store))

    window = MainWindow(controller=controller, settings=settings, palette=palette)
    window.show()
    sys.exit(app.exec())
