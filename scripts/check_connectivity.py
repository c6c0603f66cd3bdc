"""Check that the backend is reachable and the restaurant collections respond.

Runs as the end user (no API key). Pass email and password to log in first;
without them the auth check reports a warning.

Usage:
    uv run python -m scripts.check_connectivity [email password]

Exits 1 if any check reports an error, 0 otherwise (warnings included).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


async def run(email: str | None, password: str | None) -> int:
    load_dotenv(_project_root() / ".env", override=True)
    from restaurant_backend.application.services.auth_service import AuthService
    from restaurant_backend.application.services.connectivity_service import (
        ConnectivityService,
    )
    from restaurant_backend.application.services.menu_service import MenuService
    from restaurant_backend.core.config import get_settings
    from restaurant_backend.domain.enums import CheckStatus
    from restaurant_backend.domain.exceptions import AuthenticationException
    from restaurant_backend.infrastructure.appwrite import create_appwrite
    from restaurant_backend.shared.telemetry.logging import setup_logging

    settings = get_settings()
    setup_logging(settings.debug)
    database_id = settings.appwrite_database_id
    async with create_appwrite(settings, use_api_key=False) as appwrite:
        auth = AuthService(appwrite.account, appwrite.databases, database_id)
        if email and password:
            try:
                await auth.login(email, password)
            except AuthenticationException as e:
                print(f"Login failed: {e.message}", file=sys.stderr)
        service = ConnectivityService(
            appwrite.client.ping,
            auth,
            appwrite.databases,
            MenuService(appwrite.databases, appwrite.storage, database_id),
            database_id,
        )
        results = await service.run_all()

    for result in results:
        count = f" [{result.count}]" if result.count is not None else ""
        print(f"  {result.status.value.upper():<8} {result.name:<12} {result.message}{count}")
    return 1 if any(r.status is CheckStatus.ERROR for r in results) else 0


def main() -> None:
    args = sys.argv[1:]
    email, password = (args[0], args[1]) if len(args) >= 2 else (None, None)
    sys.exit(asyncio.run(run(email, password)))


if __name__ == "__main__":
    main()
