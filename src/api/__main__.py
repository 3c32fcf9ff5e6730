"""Run the relay: ``python -m src.api``."""

import logging

import uvicorn

from src.core.config import get_settings
from src.core.utils import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logging.getLogger(__name__).info(
        "API listening on http://%s:%d", settings.app_host, settings.app_port
    )
    uvicorn.run(
        "src.api.app:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
