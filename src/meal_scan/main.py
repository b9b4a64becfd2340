"""Command-line entrypoint that serves the API with uvicorn."""

import logging

import uvicorn

from meal_scan.api.app import create_app
from meal_scan.app_logging import configure_logging
from meal_scan.config import Settings
from meal_scan.containers import build_container

_logger = logging.getLogger(__name__)


def main() -> None:
    """Start the HTTP server on the configured host and port."""
    configure_logging()
    settings = Settings()
    app = create_app(build_container(settings))
    _logger.info("Meal scan server running on port %s", settings.port)
    _logger.info("Access the API at http://localhost:%s/api/health", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
