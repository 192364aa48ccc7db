"""FastAPI application factory."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from ceai.server.routes.analysis import router as analysis_router
from ceai.server.routes.health import router as health_router

logger = logging.getLogger(__name__)


def create_app(verbose: bool = False) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        verbose: When True, terminal handler shows DEBUG-level messages.

    Under ``uvicorn --reload`` the factory is called with no arguments, so the
    CLI also stashes the flag in ``_CEAI_VERBOSE``.
    """
    if not verbose and os.environ.get("_CEAI_VERBOSE") == "1":
        verbose = True

    from ceai.config import load_settings
    from ceai.logging import setup_logging

    settings = load_settings()
    setup_logging(output_dir=settings.output_dir, verbose=verbose)

    app = FastAPI(title="CEAI", docs_url="/api/docs", redoc_url=None)
    app.state.settings = settings

    app.include_router(health_router)
    app.include_router(analysis_router)

    logger.info("CEAI API ready (provider=%s)", settings.llm_provider)
    return app
