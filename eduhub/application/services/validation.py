"""Primitive input checks that raise ValidationException (HTTP 400)."""

from typing import Any

from eduhub.domain.exceptions import ValidationException


def validate_required(value: Any, field: str) -> None:
    """Reject None and empty strings."""
    if value is None or value == "":
        raise ValidationException(f"{field} is required", field=field)


def validate_max_length(value: str | None, max_length: int, field: str) -> None:
    if value and len(value) > max_length:
        raise ValidationException(
            f"{field} cannot exceed {max_length} characters", field=field
        )


def validate_id(value: Any, field: str = "ID") -> int:
    """Return value as a positive int.

    Accepts ints and strings holding a decimal integer (e.g. path params).
    bool is rejected even though it is an int subclass.
    """
    parsed: int | None = None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            parsed = None
    if parsed is None or parsed <= 0:
        raise ValidationException(
            f"{field} is required and must be a valid positive integer", field=field
        )
    return parsed
