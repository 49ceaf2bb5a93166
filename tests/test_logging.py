"""
Tests for the logging setup shared by the app and Uvicorn.
"""

import logging

import pytest

from leadprovider_api.app.core.logging_config import (
    APP_LOGGER,
    SERVER_LOGGER,
    setup_logging,
)
from leadprovider_api.app.main import app  # noqa: F401  (configures logging on import)


@pytest.fixture
def detach():
    """Remove handlers installed on throwaway namespaces after a test."""
    installed = []

    def _track(names, handlers):
        installed.append((names, handlers))
        return handlers

    yield _track
    for names, handlers in installed:
        for name in names:
            logger = logging.getLogger(name)
            for handler in handlers:
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
        for handler in handlers:
            handler.close()


def test_app_and_server_loggers_share_handlers():
    app_handlers = logging.getLogger(APP_LOGGER).handlers
    assert app_handlers
    assert logging.getLogger(SERVER_LOGGER).handlers == app_handlers
    for handler in app_handlers:
        assert handler not in logging.getLogger().handlers


def test_service_loggers_are_children_of_app_namespace():
    logger = logging.getLogger("leadprovider_api.app.services.order_service")
    assert logger.getEffectiveLevel() == logging.getLogger(APP_LOGGER).level


def test_setup_is_applied_once(detach):
    names = ("lp-once",)
    first = detach(names, setup_logging("INFO", namespaces=names))
    second = setup_logging("DEBUG", namespaces=names)
    assert second == first
    assert len(logging.getLogger("lp-once").handlers) == 1
    assert logging.getLogger("lp-once").level == logging.INFO


def test_file_receives_records_from_every_namespace(tmp_path, detach):
    logfile = tmp_path / "logs" / "api.log"
    names = ("lp-file.app", "lp-file.server")
    handlers = detach(names, setup_logging("debug", str(logfile), namespaces=names))
    assert len(handlers) == 2

    logging.getLogger("lp-file.app.orders").debug("order %s placed", 7)
    logging.getLogger("lp-file.server.access").info("GET /api/health 200")
    for handler in handlers:
        handler.flush()

    lines = logfile.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("[DEBUG] lp-file.app.orders: order 7 placed")
    assert lines[1].endswith("[INFO] lp-file.server.access: GET /api/health 200")


def test_unknown_level_falls_back_to_info(detach):
    names = ("lp-level",)
    detach(names, setup_logging("chatty", namespaces=names))
    assert logging.getLogger("lp-level").level == logging.INFO
