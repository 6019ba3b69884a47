import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import LOG_FILE

_LOGGER_NAME = "hotel_admin"
_LOG_FILE = Path(LOG_FILE)


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    logger.propagate = False

    try:
        handler = RotatingFileHandler(_LOG_FILE, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        handler = logging.StreamHandler()

    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


_logger = _configure_logger()


def log_event(area: str, user: str, action: str, detail: str = "") -> None:
    area_label = area.upper()
    message = f"{area_label} | User: {user} | Action: {action}"
    if detail:
        message += f" | Detail: {detail}"
    _logger.info(message)


def log_error(area: str, user: str, action: str, detail: str = "") -> None:
    """Same line format as log_event, at ERROR level, for store failures."""
    message = f"{area.upper()} | User: {user} | Action: {action}"
    if detail:
        message += f" | Detail: {detail}"
    _logger.error(message)
