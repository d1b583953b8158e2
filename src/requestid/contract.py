"""
Public contract: the default header name, the four strategy protocols,
and the request-id read accessor.
"""

from typing import Protocol, runtime_checkable

from starlette.requests import HTTPConnection

from src.requestid.http import ResponseWriter

# Header used by the default source, save handler and post-processor
DEFAULT_ID_HEADER = "X-Command-ID"


@runtime_checkable
class IDGenerator(Protocol):
    def generate(self) -> str: ...


@runtime_checkable
class IDSource(Protocol):
    def get_id(self, request: HTTPConnection) -> str: ...


@runtime_checkable
class IDSaveHandler(Protocol):
    def save_id(self, writer: ResponseWriter, request: HTTPConnection, request_id: str) -> None: ...


@runtime_checkable
class IDPostProcessor(Protocol):
    def process(self, writer: ResponseWriter, request: HTTPConnection, request_id: str) -> None: ...


def get_request_id(request: HTTPConnection) -> str:
    """Read the request id from the default header ("" if absent)."""
    return request.headers.get(DEFAULT_ID_HEADER, "")
