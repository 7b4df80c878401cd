"""
HTTP Middleware

Two pure ASGI middlewares wrap the application:

- RequestDeadlineMiddleware: bounds every request by a deadline and ties
  it to the client connection
- StripSlashesMiddleware: serves "/api/books/" as "/api/books"

Request deadline
================
The downstream application runs in its own asyncio task; that task is
cancelled when:

1. the deadline elapses: a 504 error envelope is sent if no response
   has started yet
2. the client disconnects: nothing is sent, there is nobody to read it

Cancelling the task raises CancelledError at whatever the request is
awaiting, which for a database call aborts the driver operation and
returns the connection to the pool.

This is a pure ASGI middleware rather than a BaseHTTPMiddleware because
it has to own the receive channel to notice a disconnect while the
handler is still running.
"""

import asyncio
import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.schemas.response import error_response

logger = logging.getLogger(__name__)


class RequestDeadlineMiddleware:
    """
    Cancel in-flight requests on timeout or client disconnect.

    Usage:
        app.add_middleware(RequestDeadlineMiddleware, timeout=10.0)
    """

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        messages: asyncio.Queue[Message] = asyncio.Queue()
        disconnected = asyncio.Event()
        response_started = False
        response_complete = False

        async def pump_receive() -> None:
            # Forward client messages to the app, watching for disconnect.
            while True:
                message = await receive()
                await messages.put(message)
                if message["type"] == "http.disconnect":
                    disconnected.set()
                    return

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started, response_complete
            if message["type"] == "http.response.start":
                response_started = True
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                response_complete = True
            await send(message)

        app_task = asyncio.ensure_future(self.app(scope, messages.get, send_wrapper))
        pump_task = asyncio.ensure_future(pump_receive())
        disconnect_task = asyncio.ensure_future(disconnected.wait())

        try:
            done, _ = await asyncio.wait(
                {app_task, disconnect_task},
                timeout=self.timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
            # A disconnect or deadline right after the last body chunk is
            # not a cancellation: let the application finish its teardown.
            if app_task in done or response_complete:
                await app_task
                return
            app_task.cancel()
            await asyncio.gather(app_task, return_exceptions=True)
        finally:
            if not app_task.done():
                app_task.cancel()
            pump_task.cancel()
            disconnect_task.cancel()

        path = scope.get("path", "")
        if disconnected.is_set():
            logger.info(f"Client disconnected, request cancelled: {scope.get('method')} {path}")
            return

        logger.warning(
            f"Request exceeded {self.timeout}s deadline, cancelled: {scope.get('method')} {path}"
        )
        if not response_started:
            response = error_response(504, "Request timed out")
            await response(scope, receive, send)


class StripSlashesMiddleware:
    """
    Drop trailing slashes from the request path before routing.

    "/api/books/" and "/api/books" reach the same route directly, with no
    redirect. The root path "/" is left alone.

    Usage:
        app = FastAPI(redirect_slashes=False)
        app.add_middleware(StripSlashesMiddleware)
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope["path"]
            stripped = path.rstrip("/") or "/"
            if stripped != path:
                scope = dict(scope)
                scope["path"] = stripped
                raw_path = scope.get("raw_path")
                if raw_path:
                    scope["raw_path"] = raw_path.rstrip(b"/") or b"/"
        await self.app(scope, receive, send)
