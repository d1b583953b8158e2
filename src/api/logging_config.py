"""
Structured JSON logging via structlog.

Call configure_logging() once at app startup.
Use get_logger(__name__) in each module.

Every event logged while a request is in flight carries its id, read from
the request's RequestContext, or from the id header of the request that
owns it when the id was only saved to the header.
"""

import logging
import sys

import structlog
from starlette.datastructures import Headers

from src.requestid import DEFAULT_ID_HEADER, current_request_context


def request_id_processor(context_key: str = "request_id", header: str = DEFAULT_ID_HEADER):
    """Build a structlog processor that attaches the current request's id, if saved."""

    def add_request_id(logger, method_name, event_dict):
        ctx = current_request_context()
        if ctx is None:
            return event_dict
        request_id = ctx.get(context_key)
        if not request_id and ctx.scope is not None:
            # Read-only view: must not replace the scope's header list
            request_id = Headers(raw=list(ctx.scope.get("headers") or [])).get(header)
        if request_id:
            event_dict.setdefault("request_id", request_id)
        return event_dict

    return add_request_id


def configure_logging(
    log_level: str = "INFO", context_key: str = "request_id", header: str = DEFAULT_ID_HEADER
):
    """Configure structlog for JSON output compatible with log aggregators."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            request_id_processor(context_key, header),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Set root logger level
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


def get_logger(name: str):
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
