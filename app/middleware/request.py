"""Raw ASGI request middleware: request ID propagation and request deadline.

Raw ASGI (no BaseHTTPMiddleware) so streaming responses are unaffected.
"""

import asyncio
import json
import logging
import re
import uuid
from typing import Callable

logger = logging.getLogger(__name__)

# Client-supplied IDs end up in logs: alphanumeric, hyphen, underscore only.
_REQUEST_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")


def _header(scope: dict, name: str) -> str | None:
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Forward a valid incoming request ID (or mint one) onto request state and the response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        incoming = (_header(scope, header_name) or "").strip()
        request_id = incoming if _REQUEST_ID_RE.match(incoming) else uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_name.encode(), request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_with_id)

    return asgi_app


def TimeoutMiddleware(app: Callable, timeout_seconds: int) -> Callable:
    """Answer 504 when a request runs past timeout_seconds.

    A workflow execution cut off here is cancelled and its record failed.
    """

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        try:
            await asyncio.wait_for(app(scope, receive, send), timeout=float(timeout_seconds))
        except TimeoutError:
            logger.warning(
                "Request timed out after %s seconds: %s %s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
            )
            body = json.dumps(
                {
                    "error": "GATEWAY_TIMEOUT",
                    "message": f"Request timed out after {timeout_seconds} seconds",
                    "details": {"timeout_seconds": timeout_seconds},
                }
            ).encode()
            await send(
                {
                    "type": "http.response.start",
                    "status": 504,
                    "headers": [(b"content-type", b"application/json")],
                }
            )
            await send({"type": "http.response.body", "body": body, "more_body": False})

    return asgi_app
