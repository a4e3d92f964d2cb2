"""Application entry point for the PortalQt assessment portal."""

from __future__ import annotations

import socket
import sys

from PySide6.QtWidgets import QApplication

from portal_app.core.portal_manager import PortalManager
from portal_app.core.settings import PortalSettings
from portal_app.server.candidate_server import start_candidate_server
from portal_app.ui.admin_main_window import AdminMainWindow
from portal_app.utils.logging_config import configure_logging


def _determine_candidate_url(port: int) -> str:
    """Best-effort determination of the local IP for the candidate-facing URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, start the candidate server, and launch the admin console."""
    logger = configure_logging()
    logger.info("Starting PortalQt...")

    settings = PortalSettings.from_env()
    portal_manager = PortalManager.from_settings(settings)
    start_candidate_server(portal_manager, host=settings.host, port=settings.port)
    candidate_url = _determine_candidate_url(settings.port)
    logger.info("Candidate page available at %s", candidate_url)
    logger.info("Using portal API at %s", settings.api_base_url)

    app = QApplication(sys.argv)
    app.aboutToQuit.connect(portal_manager.close)
    window = AdminMainWindow(
        portal_manager=portal_manager,
        candidate_url=candidate_url,
        api_base_url=settings.api_base_url,
    )
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
