"""
Pluggable request-identification middleware.

Provides:
- RequestIDInjector: ASGI middleware resolving, saving and exposing a request id
- Generators, sources, save handlers and post-processors to plug into it
- RequestContextMiddleware: per-request key/value store with guaranteed teardown
- get_request_id: read the id from the default header of any request
"""

from src.requestid.context import (
    RequestContext,
    RequestContextError,
    RequestContextMiddleware,
    current_request_context,
    get_context_value,
    get_request_context,
    request_context,
)
from src.requestid.contract import (
    DEFAULT_ID_HEADER,
    IDGenerator,
    IDPostProcessor,
    IDSaveHandler,
    IDSource,
    get_request_id,
)
from src.requestid.generators import new_random_id_generator, new_timestamp_id_generator
from src.requestid.http import ResponseWriter
from src.requestid.injector import (
    IDInjectorOptions,
    RequestIDInjector,
    StrategyBindings,
    new_request_id_injector,
)
from src.requestid.post_processors import new_post_processor_custom, new_post_processor_header
from src.requestid.save_handlers import (
    new_save_handler_context,
    new_save_handler_custom,
    new_save_handler_header,
    new_save_handler_multi,
)
from src.requestid.sources import new_source_custom, new_source_header, new_source_query_param

__all__ = [
    "DEFAULT_ID_HEADER",
    "IDGenerator",
    "IDSource",
    "IDSaveHandler",
    "IDPostProcessor",
    "IDInjectorOptions",
    "StrategyBindings",
    "RequestIDInjector",
    "new_request_id_injector",
    "get_request_id",
    "ResponseWriter",
    "RequestContext",
    "RequestContextError",
    "RequestContextMiddleware",
    "request_context",
    "current_request_context",
    "get_request_context",
    "get_context_value",
    "new_random_id_generator",
    "new_timestamp_id_generator",
    "new_source_header",
    "new_source_query_param",
    "new_source_custom",
    "new_save_handler_header",
    "new_save_handler_context",
    "new_save_handler_custom",
    "new_save_handler_multi",
    "new_post_processor_header",
    "new_post_processor_custom",
]
