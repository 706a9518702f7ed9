"""
Main entrypoint for the Bookstore API.

This module assembles the FastAPI application, sets up logging, attaches
the store handle and includes the routers.  ``create_app`` builds and
configures the app, which is then instantiated at module import time as
``app`` so it can be served directly, e.g.::

    uvicorn bookstore_api.app.main:app --reload

Tests build their own instance with ``create_app(Settings(...))`` to
point it at a throwaway database.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.errors import register_exception_handlers
from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Apply pending migrations before serving requests."""
    app.state.database.init_db()
    logger.info("Database ready at %s", app.state.database.path)
    yield
    logger.info("Shutting down %s", app.title)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)

    register_exception_handlers(app)
    app.include_router(router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
