"""
Response writer for ASGI requests.

An ASGI app has no response object until the downstream handler sends
``http.response.start`` (or ``websocket.accept``). ResponseWriter buffers
outgoing headers so save handlers and post-processors can write them before
the handler runs; the buffer is flushed into that first message by the
wrapped ``send``.
"""

from starlette.datastructures import MutableHeaders
from starlette.types import Message, Send

START_MESSAGES = ("http.response.start", "websocket.accept")


class ResponseWriter:
    """Outgoing-header buffer for one request."""

    def __init__(self):
        self.headers = MutableHeaders()
        self.started = False

    def wrap_send(self, send: Send) -> Send:
        """Return a send callable that flushes buffered headers on response start."""

        async def send_with_headers(message: Message) -> None:
            if message["type"] in START_MESSAGES and not self.started:
                self.started = True
                self._flush(message)
            await send(message)

        return send_with_headers

    def _flush(self, message: Message):
        if message.get("headers") is None:
            message["headers"] = []
        outgoing = MutableHeaders(scope=message)
        # Headers set by the downstream handler take precedence
        declared = {key.lower() for key in outgoing.keys()}
        for key, value in self.headers.raw:
            name = key.decode("latin-1")
            if name.lower() not in declared:
                outgoing.append(name, value.decode("latin-1"))
