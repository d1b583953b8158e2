"""
Request-ID injector: the ASGI middleware that composes the four strategies.

Per HTTP request or websocket connection:
    1. id = source.get_id(request)
    2. if id is empty: id = generator.generate()
    3. save_handler.save_id(writer, request, id)
    4. post_processor.process(writer, request, id)
    5. await the downstream app once, with the same scope/receive

Usage:
    app.add_middleware(RequestIDInjector, options=IDInjectorOptions())
    app.add_middleware(RequestContextMiddleware)  # only needed for context saving

Is the same as:
    app.add_middleware(
        RequestIDInjector,
        options=IDInjectorOptions(
            generator=new_timestamp_id_generator(),
            source=new_source_header(DEFAULT_ID_HEADER),
            save_handler=new_save_handler_header(DEFAULT_ID_HEADER),
            post_processor=new_post_processor_header(DEFAULT_ID_HEADER),
        ),
    )
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger
from starlette.requests import HTTPConnection, Request
from starlette.types import ASGIApp, Receive, Scope, Send

from src.requestid.contract import (
    DEFAULT_ID_HEADER,
    IDGenerator,
    IDPostProcessor,
    IDSaveHandler,
    IDSource,
)
from src.requestid.generators import new_timestamp_id_generator
from src.requestid.http import ResponseWriter
from src.requestid.metrics import EMPTY_IDS, IDS_RESOLVED, STRATEGY_ERRORS
from src.requestid.post_processors import new_post_processor_header
from src.requestid.save_handlers import new_save_handler_header
from src.requestid.sources import new_source_header


@dataclass(frozen=True)
class IDInjectorOptions:
    """Strategy slots. Any slot left as None gets the header/timestamp default."""

    generator: Optional[IDGenerator] = None
    source: Optional[IDSource] = None
    save_handler: Optional[IDSaveHandler] = None
    post_processor: Optional[IDPostProcessor] = None
    header: str = DEFAULT_ID_HEADER


@dataclass(frozen=True)
class StrategyBindings:
    """The strategies an injector was built with, fixed for its lifetime."""

    generator: IDGenerator
    source: IDSource
    save_handler: IDSaveHandler
    post_processor: IDPostProcessor


def apply_defaults(options: IDInjectorOptions) -> StrategyBindings:
    """Resolve unset option slots to the built-in implementations."""
    generator = options.generator
    if generator is None:
        generator = new_timestamp_id_generator()
    source = options.source
    if source is None:
        source = new_source_header(options.header)
    save_handler = options.save_handler
    if save_handler is None:
        save_handler = new_save_handler_header(options.header)
    post_processor = options.post_processor
    if post_processor is None:
        post_processor = new_post_processor_header(options.header)
    return StrategyBindings(generator, source, save_handler, post_processor)


class RequestIDInjector:
    """
    Ensure every HTTP request and websocket connection carries an identifier.

    Websocket connections get the id on the handshake request and on the
    ``websocket.accept`` message. Lifespan scopes pass through untouched.
    """

    def __init__(self, app: ASGIApp, options: Optional[IDInjectorOptions] = None):
        self.app = app
        self.bindings = apply_defaults(options or IDInjectorOptions())

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        if scope["type"] == "http":
            request = Request(scope, receive)
        else:
            request = HTTPConnection(scope)
        writer = ResponseWriter()
        self.resolve(writer, request)

        await self.app(scope, receive, writer.wrap_send(send))

    def resolve(self, writer: ResponseWriter, request: HTTPConnection) -> str:
        """Run steps 1-4 for one request and return the identifier used."""
        b = self.bindings

        request_id = self._attempt("source", b.source.get_id, request, default="") or ""
        origin = "source"
        if not request_id:
            request_id = self._attempt("generator", b.generator.generate, default="") or ""
            origin = "generated"

        IDS_RESOLVED.labels(origin=origin).inc()
        if not request_id:
            EMPTY_IDS.inc()
            logger.warning(f"Request {request.url.path} is proceeding without an identifier")
        else:
            logger.debug(f"Resolved request id {request_id} ({origin})")

        self._attempt("save_handler", b.save_handler.save_id, writer, request, request_id)
        self._attempt("post_processor", b.post_processor.process, writer, request, request_id)
        return request_id

    @staticmethod
    def _attempt(strategy: str, fn: Callable[..., Any], *args, default: Any = None) -> Any:
        """Call a strategy once. Failures are logged and counted, never raised."""
        try:
            return fn(*args)
        except Exception as e:
            STRATEGY_ERRORS.labels(strategy=strategy).inc()
            logger.opt(exception=e).warning(f"{strategy} failed, continuing without it: {e}")
            return default


def new_request_id_injector(
    app: ASGIApp, options: Optional[IDInjectorOptions] = None
) -> RequestIDInjector:
    return RequestIDInjector(app, options)
