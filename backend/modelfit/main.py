from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.middleware.cors import CORSMiddleware

from modelfit.api.router import api_router
from modelfit.config import settings
from modelfit.core.exceptions import (
    ModelFitError,
    http_exception_handler,
    modelfit_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from modelfit.core.logging import setup_logging
from modelfit.core.middleware import RequestIdMiddleware, TimingMiddleware
from modelfit.db.session import create_tables, dispose_engine

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging(debug=settings.debug)
    logger.info("starting_modelfit", app_name=settings.app_name, debug=settings.debug)
    for name in settings.insecure_defaults:
        logger.warning("insecure_default_secret", setting=name)
    await create_tables()
    yield
    await dispose_engine()
    logger.info("shutting_down_modelfit")


def create_app() -> FastAPI:
    app = FastAPI(
        title="ModelFit API",
        description="Model deployment feasibility evaluations and admin console",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Middleware (order matters: last added = first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    # Exception handlers
    app.add_exception_handler(ModelFitError, modelfit_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
