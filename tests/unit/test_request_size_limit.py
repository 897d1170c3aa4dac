"""RequestSizeLimitMiddleware driven directly through ASGI with a recording app."""

import json

from eduhub.core.config import Settings
from eduhub.middleware.request_size_limit import RequestSizeLimitMiddleware

MAX_BYTES = 10


class EchoApp:
    """Reads the whole body, then answers 200 with it."""

    def __init__(self) -> None:
        self.called = False

    async def __call__(self, scope, receive, send) -> None:
        self.called = True
        body = b""
        while True:
            message = await receive()
            body += message.get("body", b"")
            if not message.get("more_body", False):
                break
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": body})


def _scope(headers: list[tuple[bytes, bytes]]) -> dict:
    return {"type": "http", "method": "POST", "path": "/api/v1/health", "headers": headers}


def _receiver(chunks: list[bytes]):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict:
        return messages.pop(0) if messages else {"type": "http.disconnect"}

    return receive


async def _run(headers, chunks):
    app = EchoApp()
    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    await RequestSizeLimitMiddleware(app, max_bytes=MAX_BYTES)(
        _scope(headers), _receiver(chunks), send
    )
    return app, sent


async def test_declared_length_over_limit_is_413_without_calling_app() -> None:
    app, sent = await _run([(b"content-length", b"11")], [b"x" * 11])
    assert not app.called
    assert sent[0]["status"] == 413
    body = json.loads(sent[1]["body"])
    assert body["error"] == "PAYLOAD_TOO_LARGE"
    assert body["details"] == {"max_bytes": MAX_BYTES, "received_bytes": 11}


async def test_declared_length_within_limit_passes_through() -> None:
    app, sent = await _run([(b"content-length", b"4")], [b"abcd"])
    assert app.called
    assert sent[0]["status"] == 200
    assert sent[1]["body"] == b"abcd"


async def test_chunked_body_over_limit_is_413() -> None:
    app, sent = await _run([(b"transfer-encoding", b"chunked")], [b"x" * 6, b"y" * 6])
    assert not app.called
    assert sent[0]["status"] == 413


async def test_chunked_body_within_limit_is_replayed() -> None:
    app, sent = await _run([(b"transfer-encoding", b"chunked")], [b"abc", b"def"])
    assert app.called
    assert sent[1]["body"] == b"abcdef"


async def test_non_http_scope_is_untouched() -> None:
    called = []

    async def lifespan_app(scope, receive, send) -> None:
        called.append(scope["type"])

    await RequestSizeLimitMiddleware(lifespan_app, max_bytes=1)({"type": "lifespan"}, None, None)
    assert called == ["lifespan"]


def test_default_limit_covers_largest_upload() -> None:
    settings = Settings(secret_key="k", max_pdf_size_mb=10, max_image_size_mb=5)
    assert settings.max_request_body_bytes == 10 * 1024 * 1024 + 64 * 1024
