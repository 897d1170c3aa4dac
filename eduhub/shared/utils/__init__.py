"""Shared utilities (datetime helpers)."""

from eduhub.shared.utils.datetime import days_ago, ensure_utc, utc_now

__all__ = ["days_ago", "ensure_utc", "utc_now"]
