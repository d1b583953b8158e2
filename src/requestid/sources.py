"""
Identifier sources: where an incoming request may already carry an id.

A source returns "" when the request has no identifier. The orchestrator
then falls back to the generator.
"""

import inspect
from typing import Callable, Optional

from starlette.requests import HTTPConnection


class HeaderSource:
    """Read the id verbatim from a request header."""

    def __init__(self, header: str):
        self.header = header

    def get_id(self, request: HTTPConnection) -> str:
        return request.headers.get(self.header, "")


class QueryParamSource:
    """Read the id from a query-string parameter."""

    def __init__(self, name: str):
        self.name = name

    def get_id(self, request: HTTPConnection) -> str:
        return request.query_params.get(self.name, "")


class CustomSource:
    """
    Delegate extraction to a function of the request (cookies, headers, query).

    The function is called synchronously before the downstream handler runs,
    so it cannot await the request body; consuming the body here would also
    leave nothing for the handler. A coroutine function is rejected with
    TypeError, which the injector treats as "no id".
    """

    def __init__(self, fn: Callable[[HTTPConnection], Optional[str]]):
        self.fn = fn

    def get_id(self, request: HTTPConnection) -> str:
        result = self.fn(request)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError("custom sources must be synchronous functions")
        return result or ""


def new_source_header(header: str) -> HeaderSource:
    return HeaderSource(header)


def new_source_query_param(name: str) -> QueryParamSource:
    return QueryParamSource(name)


def new_source_custom(fn: Callable[[HTTPConnection], Optional[str]]) -> CustomSource:
    return CustomSource(fn)
