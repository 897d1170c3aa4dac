"""DTOs for the API audit log (no dependency on ORM)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ApiAuditEntry:
    """Input for recording one API request/response pair."""

    http_method: str
    request_url: str
    request_path: str
    response_status: int
    response_time_ms: int
    user_id: int | None = None
    role: str | None = None
    query_params: dict[str, Any] | None = None
    request_body: Any | None = None
    response_body: Any | None = None
    error_code: str | None = None
    error_message: str | None = None
    request_id: str | None = None
