"""Turn API auditing on or off, or show its current state.

Usage:
    python -m scripts.audit_control on|off|status
The flag lives in system_config (key AUDIT_ENABLED). Running servers pick up
a change once their cached copy expires (AUDIT_FLAG_CACHE_TTL_SECONDS).
"""

import argparse
import asyncio
import sys

from eduhub.core.config import get_settings
from eduhub.infrastructure.cache import InMemoryCache
from eduhub.infrastructure.persistence import database
from eduhub.infrastructure.services import AuditService
from eduhub.shared.logging import setup_logging


async def run(action: str) -> None:
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL is not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            service = AuditService(
                session, InMemoryCache(), settings.audit_flag_cache_ttl_seconds
            )
            if action == "status":
                enabled = await service.is_auditing_enabled()
            else:
                enabled = await service.set_auditing_enabled(action == "on")
    await database.dispose_engine()
    print(f"API auditing is {'ON' if enabled else 'OFF'}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Control API audit logging")
    parser.add_argument("action", choices=["on", "off", "status"])
    args = parser.parse_args()
    asyncio.run(run(args.action))


if __name__ == "__main__":
    main()
