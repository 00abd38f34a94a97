"""ASGI handler — translates ASGI scope/messages to roost types.

The only component that touches raw ASGI directly. Reads the request
body, builds an immutable Request, runs the synchronous handler tree
in an anyio worker thread, and sends the Response back through ASGI send().
"""

import logging

import anyio.to_thread

from roost._internal.asgi import Receive, Scope, Send
from roost.errors import HTTPError, error_response
from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Handler
from roost.server.sender import send_response

logger = logging.getLogger("roost.server")


async def read_body(receive: Receive) -> bytes:
    """Drain ``http.request`` messages into a single body."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def dispatch(handler: Handler, request: Request) -> Response:
    """Run *handler*, turning raised errors into responses.

    ``HTTPError`` raised by a handler or middleware maps to its status.
    Anything else is logged and answered with a bare 500.
    """
    try:
        return handler(request)
    except HTTPError as exc:
        return error_response(exc)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        return Response(body="Internal Server Error\n", status=500)


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


class ASGIHandler:
    """Expose a roost handler (usually a root ``Router``) as an ASGI app.

    Usage::

        router = Router()
        router.handle("GET /", index)
        app = ASGIHandler(router)   # serve with any ASGI server
    """

    __slots__ = ("handler",)

    def __init__(self, handler: Handler) -> None:
        self.handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        body = await read_body(receive)
        request = Request.from_asgi(dict(scope), body)
        # Handlers are synchronous; keep them off the event loop
        response = await anyio.to_thread.run_sync(dispatch, self.handler, request)
        await send_response(response, send, method=request.method)
