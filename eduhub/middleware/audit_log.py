"""API audit log middleware.

Records every /api/ request (principal, request, response, timing) in
api_audit_log once the response has been produced. Skipped when auditing
is switched off at runtime or when no database is configured. Write
failures are logged and never reach the client.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

import eduhub.infrastructure.persistence.database as database
from eduhub.application.dtos.audit import ApiAuditEntry
from eduhub.core.config import get_settings
from eduhub.infrastructure.cache import InMemoryCache
from eduhub.infrastructure.security.jwt import principal_from_claims, verify_token
from eduhub.infrastructure.services.audit_service import AuditService

logger = logging.getLogger(__name__)

_AUDITED_PREFIX = "/api/"
MASK = "***"
SECRET_KEYS = frozenset(
    {"password", "new_password", "current_password", "refresh_token", "access_token", "token"}
)


def mask_secrets(value: Any) -> Any:
    """Return value with every SECRET_KEYS entry replaced by MASK, recursively."""
    if isinstance(value, dict):
        return {
            k: MASK if str(k).lower() in SECRET_KEYS else mask_secrets(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [mask_secrets(v) for v in value]
    return value


def parse_json_body(raw: bytes, content_type: str | None, max_bytes: int) -> Any:
    """Decode a JSON body; None when empty, not JSON, too large or malformed."""
    if not raw or len(raw) > max_bytes:
        return None
    if not content_type or "application/json" not in content_type:
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        return None


def principal_ids(request: Request) -> tuple[int | None, str | None]:
    """Return (user_id, role) from a valid bearer token, else (None, None)."""
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        return (None, None)
    try:
        principal = principal_from_claims(verify_token(auth[7:].strip()))
    except ValueError:
        return (None, None)
    return (principal.id, principal.role.value)


def error_fields(status: int, body: Any) -> tuple[str | None, str | None]:
    """(error_code, message) from an error envelope; (None, None) below 400."""
    if status < 400:
        return (None, None)
    if isinstance(body, dict):
        message = body.get("message")
        return (body.get("error"), str(message) if message is not None else None)
    return (None, None)


async def _read_response_body(response: Response) -> tuple[Response, bytes]:
    """Drain a call_next response and rebuild it so it can still be sent."""
    chunks = [chunk async for chunk in response.body_iterator]  # type: ignore[attr-defined]
    body = b"".join(c if isinstance(c, bytes) else c.encode() for c in chunks)
    rebuilt = Response(
        content=body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type,
        background=response.background,
    )
    return rebuilt, body


def ApiAuditLogMiddleware(app: Callable) -> Callable:
    """Audit /api/ requests. No-op without a database."""

    class _Middleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next: Callable) -> Response:
            if not request.url.path.startswith(_AUDITED_PREFIX):
                return await call_next(request)
            database._ensure_engine()
            if database.AsyncSessionLocal is None:
                return await call_next(request)

            settings = get_settings()
            request_body = parse_json_body(
                await request.body(),
                request.headers.get("content-type"),
                settings.audit_max_body_bytes,
            )
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = int((time.perf_counter() - started) * 1000)

            response_body = None
            if "application/json" in (response.headers.get("content-type") or ""):
                response, raw = await _read_response_body(response)
                response_body = parse_json_body(
                    raw, "application/json", settings.audit_max_body_bytes
                )

            user_id, role = principal_ids(request)
            error_code, error_message = error_fields(response.status_code, response_body)
            entry = ApiAuditEntry(
                http_method=request.method,
                request_url=str(request.url),
                request_path=request.url.path,
                response_status=response.status_code,
                response_time_ms=elapsed_ms,
                user_id=user_id,
                role=role,
                query_params=dict(request.query_params) or None,
                request_body=mask_secrets(request_body),
                response_body=mask_secrets(response_body),
                error_code=error_code,
                error_message=error_message,
                request_id=getattr(request.state, "request_id", None),
            )
            cache = getattr(request.app.state, "audit_cache", None)
            if cache is None:
                cache = request.app.state.audit_cache = InMemoryCache()
            try:
                async with database.AsyncSessionLocal() as session:
                    async with session.begin():
                        svc = AuditService(
                            session, cache, settings.audit_flag_cache_ttl_seconds
                        )
                        if await svc.is_auditing_enabled():
                            await svc.record(entry)
            except Exception as e:
                logger.warning("Failed to write API audit log: %s", e, exc_info=True)
            return response

    return _Middleware(app)
