"""
FastAPI application factory with lifespan context manager.

Usage:
    uvicorn src.api.app:create_app --factory --host 0.0.0.0 --port 8000

    # Random ids, saved to both the request header and the request context:
    REQUESTID_GENERATOR=random REQUESTID_SAVE_TO=both uvicorn src.api.app:create_app --factory
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger
from prometheus_client import make_asgi_app

from src.api.config import RequestIDConfig, Settings
from src.api.logging_config import configure_logging
from src.api.state import AppState
from src.requestid import (
    IDInjectorOptions,
    RequestContextMiddleware,
    RequestIDInjector,
    new_post_processor_custom,
    new_post_processor_header,
    new_random_id_generator,
    new_save_handler_context,
    new_save_handler_header,
    new_save_handler_multi,
    new_source_header,
    new_timestamp_id_generator,
)


def build_injector_options(cfg: RequestIDConfig) -> IDInjectorOptions:
    """Map the REQUESTID_* settings onto injector strategy slots."""
    if cfg.generator == "random":
        generator = new_random_id_generator()
    else:
        generator = new_timestamp_id_generator()

    if cfg.save_to == "context":
        save_handler = new_save_handler_context(cfg.context_key)
    elif cfg.save_to == "both":
        save_handler = new_save_handler_multi(
            new_save_handler_header(cfg.header),
            new_save_handler_context(cfg.context_key),
        )
    else:
        save_handler = new_save_handler_header(cfg.header)

    if cfg.expose_header:
        post_processor = new_post_processor_header(cfg.header)
    else:
        post_processor = new_post_processor_custom(lambda writer, request, request_id: None)

    return IDInjectorOptions(
        generator=generator,
        source=new_source_header(cfg.header),
        save_handler=save_handler,
        post_processor=post_processor,
        header=cfg.header,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging. Shutdown: log."""
    state: AppState = app.state.app_state
    settings: Settings = state.settings

    configure_logging(
        settings.api.log_level,
        context_key=settings.request_id.context_key,
        header=settings.request_id.header,
    )
    logger.info(
        f"Request ids on header {settings.request_id.header} "
        f"(generator={settings.request_id.generator}, save_to={settings.request_id.save_to})"
    )

    yield

    logger.info("Shutting down API")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """FastAPI application factory."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Request ID API",
        description="Host application for the pluggable request-id middleware.",
        version="0.1.0",
        lifespan=lifespan,
    )

    options = build_injector_options(settings.request_id)

    # Attach state
    app.state.app_state = AppState(settings=settings, injector_options=options)

    # Middleware: the last one added runs first, so the context wraps the injector
    app.add_middleware(RequestIDInjector, options=options)
    app.add_middleware(RequestContextMiddleware)

    # Prometheus metrics endpoint
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    # Register routes
    from src.api.routes.echo import router as echo_router
    from src.api.routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(echo_router)

    return app
