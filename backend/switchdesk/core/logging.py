"""Logging configuration"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from switchdesk.core.config import Settings

DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"
PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Per-request and per-frame chatter from the server and transport libraries
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "websockets": logging.WARNING,
    "httpx": logging.WARNING,
}


def _rich_handler(settings: Settings) -> RichHandler:
    # Colour codes only when a terminal is attached outside production
    console = Console(force_terminal=not settings.is_production, width=120)
    handler = RichHandler(
        console=console,
        show_path=settings.is_development,
        markup=False,
        rich_tracebacks=True,
        tracebacks_width=120,
        log_time_format=DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _plain_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(settings: Settings) -> logging.Handler:
    """Route every logger through one root handler and return it.

    ``force=True`` replaces whatever uvicorn installed on the root logger.
    """
    level = logging.getLevelName(settings.log_level)
    fallback_reason = None
    try:
        handler: logging.Handler = _rich_handler(settings)
    except Exception as e:
        fallback_reason = f"{type(e).__name__}: {e}"
        handler = _plain_handler()

    logging.basicConfig(level=level, handlers=[handler], force=True)
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    logger = logging.getLogger(__name__)
    if fallback_reason:
        logger.warning(f"Rich logging unavailable ({fallback_reason}), using plain output")
    logger.info(f"Logging: {settings.log_level} | Env: {settings.environment}")
    return handler
