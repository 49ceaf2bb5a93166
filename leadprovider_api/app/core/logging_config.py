"""
Logging configuration for the API process.

``setup_logging`` attaches one console handler, and optionally a file
handler, to the ``leadprovider_api`` logger namespace and to Uvicorn's.
Service messages, server errors and request access lines then share
one stream and one format.  The root logger is left untouched: records
still propagate to it, so a test runner can capture them.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional


APP_LOGGER = "leadprovider_api"
# ``uvicorn.error`` and ``uvicorn.access`` propagate into ``uvicorn``.
SERVER_LOGGER = "uvicorn"
LOGGER_NAMESPACES = (APP_LOGGER, SERVER_LOGGER)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_handlers(logfile: Optional[str] = None) -> List[logging.Handler]:
    """Console handler plus a file handler when ``logfile`` is given."""
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    namespaces: Iterable[str] = LOGGER_NAMESPACES,
) -> List[logging.Handler]:
    """Attach shared handlers to every logger in ``namespaces``.

    The first namespace decides whether setup already happened: if it
    has handlers, nothing changes and its handlers are returned.  This
    keeps repeated ``create_app`` calls from duplicating output.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file that receives the same records as the console.
        Missing parent directories are created.
    namespaces : Iterable[str]
        Logger names to configure.  Child loggers such as
        ``leadprovider_api.app.services.order_service`` inherit them.
    """
    names = list(namespaces)
    primary = logging.getLogger(names[0])
    if primary.handlers:
        return list(primary.handlers)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handlers = build_handlers(logfile)
    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        for handler in handlers:
            logger.addHandler(handler)
    return handlers
