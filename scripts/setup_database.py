"""Provision the restaurant database, buckets, collections, attributes, and indexes.

Safe to re-run: objects that already exist are reported and left alone, and
gaps (e.g. attributes missing from an existing collection) are filled.

Usage:
    uv run python -m scripts.setup_database [--seed]

--seed also inserts the sample categories and menu items when provisioning
succeeded. Requires APPWRITE_ENDPOINT, APPWRITE_PROJECT_ID and an
APPWRITE_API_KEY with databases and buckets scopes. Ctrl-C stops the run
after the current collection. Exits 0 if every object was ensured, 1 otherwise.
"""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees APPWRITE_* when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def run(seed: bool) -> int:
    _load_env()
    from restaurant_backend.application.services.restaurant_schema import (
        build_restaurant_schema,
    )
    from restaurant_backend.application.services.sample_data import SampleDataLoader
    from restaurant_backend.application.services.schema_provisioner import SchemaProvisioner
    from restaurant_backend.core.config import get_settings
    from restaurant_backend.infrastructure.appwrite import create_appwrite
    from restaurant_backend.shared.telemetry.logging import setup_logging

    try:
        settings = get_settings()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    setup_logging(settings.debug)

    cancel_event = asyncio.Event()
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGINT, cancel_event.set)
    except NotImplementedError:
        pass

    schema = build_restaurant_schema(settings.appwrite_database_id)
    async with create_appwrite(settings) as appwrite:
        report = await SchemaProvisioner(appwrite.schema_store).provision(
            schema, cancel_event=cancel_event
        )

        for kind, counts in report.summary().items():
            print(
                f"  {kind:<10} created={counts['created']:<3} "
                f"existing={counts['already_exists']:<3} failed={counts['failed']}"
            )
        for result in report.failed():
            print(f"  FAILED {result.kind.value} {result.qualified_id}: {result.reason}", file=sys.stderr)
        if report.aborted:
            print("Database could not be created; nothing else was attempted.", file=sys.stderr)
        if report.cancelled:
            print("Cancelled before completion; re-run to finish.", file=sys.stderr)
        if not report.success:
            return 1
        print(f"Database {schema.database_id} is ready.")

        if seed:
            result = await SampleDataLoader(
                appwrite.databases, schema.database_id
            ).seed()
            if not result.success:
                print(f"Sample data failed: {result.error}", file=sys.stderr)
                return 1
            print(
                f"Sample data added: {result.categories_created} categories, "
                f"{result.menu_items_created} menu items."
            )
    return 0


def main() -> None:
    sys.exit(asyncio.run(run("--seed" in sys.argv[1:])))


if __name__ == "__main__":
    main()
