# src/tasklist/web/app.py

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..core.state import AppState
from .render import TaskViews
from .routes import TaskRoutes

logger = logging.getLogger(__name__)


def create_app(state: AppState) -> FastAPI:
    """Build the FastAPI app around an already-constructed AppState."""
    settings = state.settings
    app_name = str(getattr(settings, "app_name", "Tasks"))

    app = FastAPI(title=app_name, docs_url=None, redoc_url=None)

    routes = TaskRoutes(
        app,
        state.task_store,
        TaskViews(app_name),
        page_size=int(getattr(settings, "page_size", 10)),
    )
    routes.add_routes()

    logger.debug("App created name=%s", app_name)
    return app
