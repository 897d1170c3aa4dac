"""Pure helpers of the API audit middleware and request id sanitising."""

import pytest

from eduhub.middleware.audit_log import error_fields, mask_secrets, parse_json_body
from eduhub.middleware.request_id import sanitize_request_id


def test_mask_secrets_recurses() -> None:
    body = {
        "email": "a@example.com",
        "Password": "hunter2",
        "nested": [{"refresh_token": "abc", "keep": 1}],
    }
    assert mask_secrets(body) == {
        "email": "a@example.com",
        "Password": "***",
        "nested": [{"refresh_token": "***", "keep": 1}],
    }


def test_mask_secrets_leaves_scalars() -> None:
    assert mask_secrets(None) is None
    assert mask_secrets("password") == "password"


def test_parse_json_body() -> None:
    assert parse_json_body(b'{"a": 1}', "application/json; charset=utf-8", 100) == {"a": 1}


@pytest.mark.parametrize(
    ("raw", "content_type", "max_bytes"),
    [
        (b"", "application/json", 100),
        (b'{"a": 1}', "multipart/form-data", 100),
        (b'{"a": 1}', None, 100),
        (b"{not json", "application/json", 100),
        (b'{"a": "' + b"x" * 200 + b'"}', "application/json", 100),
    ],
)
def test_parse_json_body_returns_none(raw: bytes, content_type: str | None, max_bytes: int) -> None:
    assert parse_json_body(raw, content_type, max_bytes) is None


def test_error_fields() -> None:
    assert error_fields(200, {"error": "X"}) == (None, None)
    assert error_fields(403, {"error": "FORBIDDEN", "message": "No"}) == ("FORBIDDEN", "No")
    assert error_fields(500, None) == (None, None)


def test_sanitize_request_id() -> None:
    assert sanitize_request_id("abc-123_X") == "abc-123_X"
    generated = sanitize_request_id("bad id; drop")
    assert generated != "bad id; drop"
    assert len(generated) == 36
    assert sanitize_request_id("x" * 65) != "x" * 65
