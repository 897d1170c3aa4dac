"""Request body size limit middleware.

Rejects bodies larger than the biggest accepted upload with 413 before any
route reads them. Declared Content-Length is checked up front; bodies sent
without one (chunked) are counted while buffered and replayed to the app.
Raw ASGI, like the request id middleware.
"""

import json
from typing import Callable

from eduhub.middleware.request_id import get_header


async def send_payload_too_large(send: Callable, max_bytes: int, received: int) -> None:
    """Answer 413 with the usual error envelope."""
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes, "received_bytes": received},
        }
    ).encode()
    await send(
        {
            "type": "http.response.start",
            "status": 413,
            "headers": [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None and declared.strip().isdigit():
            length = int(declared)
            if length > max_bytes:
                await send_payload_too_large(send, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        buffered: list[dict] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away; let the app see the disconnect.
                buffered.append(message)
                break
            total += len(message.get("body", b""))
            if total > max_bytes:
                await send_payload_too_large(send, max_bytes, total)
                return
            buffered.append(message)
            if not message.get("more_body", False):
                break

        pending = iter(buffered)

        async def replay() -> dict:
            message = next(pending, None)
            if message is None:
                return await receive()
            return message

        await app(scope, replay, send)

    return asgi_app
