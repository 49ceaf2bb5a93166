"""Entry point that serves the Lead Provider API with Uvicorn.

Host and port are read from the environment variables ``HOST`` and
``PORT`` (defaults ``0.0.0.0`` and ``3001``).  All other configuration
is read by ``leadprovider_api.app.core.config``; see that module for the
supported variables.

Uvicorn's own logging config is disabled so its error and access lines
go through the handlers installed by ``create_app``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from leadprovider_api.app.core.config import settings
from leadprovider_api.app.main import app


logger = logging.getLogger("leadprovider_api.run")


async def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3001"))
    config = Config(
        app=app,
        host=host,
        port=port,
        reload=False,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logger.info("Server listening on port %s", port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
