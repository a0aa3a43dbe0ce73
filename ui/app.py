"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

import sleekid
from config import load_config
from internal.health import (
    HealthChecker,
    check_event_loop,
    create_generator_check,
    create_random_source_check,
)
from sleekid.errors import InvalidConfigurationError, RandomSourceError
from sleekid.log import LogLevel, StructuredLogger, get_logger
from ui.routes import health, ids
from utils.crash import create_async_handler

VERSION = "2.0.0"


def _error_response(status_code, exc):
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {"detail": exc.args[0] if exc.args else str(exc), "error_id": exc.error_id, **exc.context}
        ),
    )


def create_app(config=None, generator=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel.parse(config.logging.level))
    logger_instance = get_logger(component="api")

    generator = generator or sleekid.setup(config.generator)
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("random_source", create_random_source_check(), critical=True)
    health_checker.register("generator", create_generator_check(generator), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=VERSION)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        yield
        logger_instance.info("Application shutdown complete")

    app = FastAPI(
        title="SleekID",
        version=VERSION,
        description="sortable, tamper-evident prefixed identifiers",
        lifespan=lifespan,
    )

    @app.exception_handler(InvalidConfigurationError)
    async def invalid_configuration(request: Request, exc: InvalidConfigurationError):
        logger_instance.warn("Rejected request", error=exc, path=request.url.path)
        return _error_response(400, exc)

    @app.exception_handler(RandomSourceError)
    async def random_source_failure(request: Request, exc: RandomSourceError):
        return _error_response(503, exc)

    ids.init(generator)
    health.init(health_checker)

    app.include_router(ids.router)
    app.include_router(health.router)

    return app
