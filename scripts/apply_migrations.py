#!/usr/bin/env python3
"""
Apply all pending SQL migrations against DATABASE_URL without starting the API.
"""
import asyncio
import logging
from folio.modules.database import database
from folio.modules.migration_runner import run_migrations

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("folio.scripts.apply_migrations")


async def main():
    logger.info("Connecting to DB...")
    await database.connect()
    try:
        await run_migrations(database)
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
