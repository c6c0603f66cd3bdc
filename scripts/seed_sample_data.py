"""Insert the sample categories and menu items.

Every run inserts new rows (four categories, four menu items); there is no
duplicate check. Run scripts.setup_database first.

Usage:
    uv run python -m scripts.seed_sample_data
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


async def run() -> int:
    load_dotenv(_project_root() / ".env", override=True)
    from restaurant_backend.application.services.sample_data import SampleDataLoader
    from restaurant_backend.core.config import get_settings
    from restaurant_backend.infrastructure.appwrite import create_appwrite
    from restaurant_backend.shared.telemetry.logging import setup_logging

    settings = get_settings()
    setup_logging(settings.debug)
    async with create_appwrite(settings) as appwrite:
        result = await SampleDataLoader(
            appwrite.databases, settings.appwrite_database_id
        ).seed()
    if not result.success:
        print(f"Seeding failed: {result.error}", file=sys.stderr)
        return 1
    print(
        f"Seeded {result.categories_created} categories and "
        f"{result.menu_items_created} menu items."
    )
    return 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
