# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then serves the web app with uvicorn.
"""

from __future__ import annotations

import logging

import uvicorn

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..web.app import create_app

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.task_store.close()
    except Exception:
        logger.exception("TaskStore close failed.")


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(
        log_dir=settings.log_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s on http://%s:%s ...", settings.app_name, settings.host, settings.port)

    state = create_initial_state(settings=settings)
    app = create_app(state)

    try:
        # log_config=None keeps our handlers; uvicorn loggers propagate to root.
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
