"""Entry point for the Bookstore API.

Starts the FastAPI application with Uvicorn.  Host, port, database
path and log level are read from environment variables (``HOST``,
``PORT``, ``DATABASE_URL``, ``LOG_LEVEL``); see
``bookstore_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from bookstore_api.app.core.config import settings
from bookstore_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Bookstore API stopped")


if __name__ == "__main__":
    main()
