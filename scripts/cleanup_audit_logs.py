"""Delete api_audit_log rows older than the retention window.

Usage:
    python -m scripts.cleanup_audit_logs [--days N]
Defaults to AUDIT_RETENTION_DAYS. Meant to run daily from cron or a scheduler.
"""

import argparse
import asyncio
import sys

from eduhub.core.config import get_settings
from eduhub.infrastructure.cache import InMemoryCache
from eduhub.infrastructure.persistence import database
from eduhub.infrastructure.services import AuditService
from eduhub.shared.logging import setup_logging


async def run(days: int) -> int:
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL is not configured", file=sys.stderr)
        sys.exit(1)
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            deleted = await AuditService(session, InMemoryCache()).cleanup_old_audits(days)
    await database.dispose_engine()
    return deleted


def main() -> None:
    settings = get_settings()
    setup_logging()
    parser = argparse.ArgumentParser(description="Delete old API audit logs")
    parser.add_argument(
        "--days",
        type=int,
        default=settings.audit_retention_days,
        help="Retention window in days (default: AUDIT_RETENTION_DAYS)",
    )
    args = parser.parse_args()
    if args.days <= 0:
        parser.error("--days must be positive")
    deleted = asyncio.run(run(args.days))
    print(f"Deleted {deleted} audit log row(s) older than {args.days} days")


if __name__ == "__main__":
    main()
