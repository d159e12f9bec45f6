import logging
import sys

import uvicorn
from pydantic import ValidationError

from .categories import CategoryIndexError
from .config import Settings
from .logging_config import setup_logging
from .main import create_app

logger = logging.getLogger(__name__)


def run() -> None:
    """Start the service on ``MY_APP_HOST:MY_APP_PORT``.

    Bad settings or an unreadable fortune directory end the process
    with status 1.
    """
    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        setup_logging()
        logger.critical("Invalid configuration:\n%s", exc)
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_file)
    try:
        app = create_app(settings)
    except CategoryIndexError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    host = str(settings.host)
    logger.info("Serving fortunes on %s:%s", host, settings.port)
    uvicorn.run(
        app,
        host=host,
        port=settings.port,
        http="h11",
        timeout_keep_alive=settings.keepalive_timeout,
        log_level=settings.log_level.lower(),
        # keep the root logger configuration from setup_logging
        log_config=None,
    )


if __name__ == "__main__":
    run()
