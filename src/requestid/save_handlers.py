"""
Identifier save handlers: record the resolved id where downstream code can read it.

- header:  overwrite a header on the inbound request
- context: store under a key in the request's RequestContext
- custom:  delegate to a function
- multi:   run several handlers in order
"""

from typing import Any, Callable, Sequence

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection

from src.requestid.context import RequestContextError, get_request_context
from src.requestid.http import ResponseWriter

SaveFn = Callable[[ResponseWriter, HTTPConnection, str], None]


class HeaderSaveHandler:
    """
    Set the id on the *request* headers so handlers later in the chain see it.

    The ASGI scope's raw header list is rewritten in place, so every Request or
    WebSocket built from the same scope (including ones already holding
    cached headers) observes the new value.
    """

    def __init__(self, header: str):
        self.header = header

    def save_id(self, writer: ResponseWriter, request: HTTPConnection, request_id: str):
        raw = request.scope.get("headers")
        if not isinstance(raw, list):
            raw = request.scope["headers"] = list(raw or [])
        MutableHeaders(raw=raw)[self.header] = request_id


class ContextSaveHandler:
    """Store the id in the request-scoped RequestContext under ``key``."""

    def __init__(self, key: Any):
        self.key = key

    def save_id(self, writer: ResponseWriter, request: HTTPConnection, request_id: str):
        ctx = get_request_context(request)
        if ctx is None:
            raise RequestContextError(
                "no request context is active; install RequestContextMiddleware"
            )
        ctx.set(self.key, request_id)


class CustomSaveHandler:
    def __init__(self, fn: SaveFn):
        self.fn = fn

    def save_id(self, writer: ResponseWriter, request: HTTPConnection, request_id: str):
        self.fn(writer, request, request_id)


class MultiSaveHandler:
    """
    Save into several media in order.

    Every handler is attempted even if an earlier one fails; the first
    failure is raised once all of them have run.
    """

    def __init__(self, handlers: Sequence):
        self.handlers = tuple(handlers)

    def save_id(self, writer: ResponseWriter, request: HTTPConnection, request_id: str):
        first_error = None
        for handler in self.handlers:
            try:
                handler.save_id(writer, request, request_id)
            except Exception as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error


def new_save_handler_header(header: str) -> HeaderSaveHandler:
    return HeaderSaveHandler(header)


def new_save_handler_context(key: Any) -> ContextSaveHandler:
    return ContextSaveHandler(key)


def new_save_handler_custom(fn: SaveFn) -> CustomSaveHandler:
    return CustomSaveHandler(fn)


def new_save_handler_multi(*handlers) -> MultiSaveHandler:
    return MultiSaveHandler(handlers)
