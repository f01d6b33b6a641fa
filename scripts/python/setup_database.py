#!/usr/bin/env python3
"""Create the catalog schema and load sample data.

Safe to run repeatedly: tables and indexes are only created when missing and
sample data is only inserted into an empty catalog.

Usage:
    python scripts/python/setup_database.py [--no-seed]
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import asyncpg

from recipe_catalog.core.config import get_settings
from recipe_catalog.database.connection import close_database_pool, init_database_pool
from recipe_catalog.database.schema import create_schema
from recipe_catalog.database.seed import seed_sample_data
from recipe_catalog.observability.logging import get_logger, setup_logging


logger = get_logger(__name__)


async def setup_database(*, seed: bool) -> None:
    pool = await init_database_pool()
    try:
        await create_schema(pool)
        if seed:
            await seed_sample_data(pool)
    finally:
        await close_database_pool()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--no-seed", action="store_true", help="Only create the schema")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(
        log_level=settings.logging.level,
        log_format="text",
        is_development=True,
    )

    try:
        asyncio.run(setup_database(seed=not args.no_seed))
    except (OSError, asyncpg.PostgresError):
        logger.exception("Database setup failed")
        return 1

    logger.info("Database ready", database=settings.database.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
