"""
Request-scoped key/value store.

A RequestContext is acquired once per request by ``request_context(scope)``
and cleared when the request leaves that block, on every exit path. The
active context is reachable two ways:

- from the ASGI scope: ``scope["state"]["request_context"]`` (``request.state``)
- from the running task: ``current_request_context()`` (ContextVar)

RequestContextMiddleware wraps an app so each HTTP request and websocket
connection gets its own context. It must be installed outside
RequestIDInjector when a context save handler is used.
"""

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

STATE_KEY = "request_context"

_current_context: ContextVar[Optional["RequestContext"]] = ContextVar(
    "request_context", default=None
)


class RequestContextError(RuntimeError):
    """Raised on use of a missing or already-cleared request context."""


class RequestContext:
    """Thread-safe key/value store whose lifetime is one request."""

    def __init__(self, scope: Optional[Scope] = None):
        # ASGI scope of the owning request, for readers that need its headers
        self.scope = scope
        self._lock = threading.Lock()
        self._values: Dict[Any, Any] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, key: Any, value: Any):
        with self._lock:
            if self._closed:
                raise RequestContextError("request context has already been cleared")
            self._values[key] = value

    def get(self, key: Any, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def pop(self, key: Any, default: Any = None) -> Any:
        with self._lock:
            return self._values.pop(key, default)

    def clear(self):
        """Drop all values and refuse further writes."""
        with self._lock:
            self._values.clear()
            self._closed = True

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


@contextmanager
def request_context(scope: Scope) -> Iterator[RequestContext]:
    """Acquire a RequestContext for one request and clear it on exit."""
    ctx = RequestContext(scope)
    scope.setdefault("state", {})[STATE_KEY] = ctx
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        ctx.clear()
        _current_context.reset(token)
        scope["state"].pop(STATE_KEY, None)


def current_request_context() -> Optional[RequestContext]:
    """Context of the request being served by the current task, if any."""
    return _current_context.get()


def get_request_context(request: HTTPConnection) -> Optional[RequestContext]:
    """Context attached to ``request``, falling back to the current task's."""
    state = request.scope.get("state") or {}
    ctx = state.get(STATE_KEY)
    if ctx is None:
        ctx = _current_context.get()
    return ctx


def get_context_value(request: HTTPConnection, key: Any, default: Any = "") -> Any:
    """Read ``key`` from the request's context; ``default`` if absent or no context."""
    ctx = get_request_context(request)
    if ctx is None:
        return default
    return ctx.get(key, default)


class RequestContextMiddleware:
    """Give every HTTP request and websocket its own RequestContext, torn down afterwards."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        with request_context(scope):
            await self.app(scope, receive, send)
