"""
Identifier post-processors: expose the resolved id outward, usually on the response.
"""

from typing import Callable

from starlette.requests import HTTPConnection

from src.requestid.http import ResponseWriter

ProcessFn = Callable[[ResponseWriter, HTTPConnection, str], None]


class HeaderPostProcessor:
    """Set the id on the outgoing response, replacing any previous values."""

    def __init__(self, header: str):
        self.header = header

    def process(self, writer: ResponseWriter, request: HTTPConnection, request_id: str):
        writer.headers[self.header] = request_id


class CustomPostProcessor:
    def __init__(self, fn: ProcessFn):
        self.fn = fn

    def process(self, writer: ResponseWriter, request: HTTPConnection, request_id: str):
        self.fn(writer, request, request_id)


def new_post_processor_header(header: str) -> HeaderPostProcessor:
    return HeaderPostProcessor(header)


def new_post_processor_custom(fn: ProcessFn) -> CustomPostProcessor:
    return CustomPostProcessor(fn)
