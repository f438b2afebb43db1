import os
import logging
from typing import List, Optional
from databases import Database

logger = logging.getLogger("folio.migrations")

MIGRATION_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")

LEDGER_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    filename TEXT PRIMARY KEY,
    applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


def split_statements(sql: str) -> List[str]:
    """Split a migration file into individual statements on ';'."""
    return [s.strip() for s in sql.split(";") if s.strip()]


async def applied_migrations(database: Database) -> set:
    await database.execute(LEDGER_DDL)
    rows = await database.fetch_all("SELECT filename FROM schema_migrations")
    return {row["filename"] for row in rows}


async def run_migrations(database: Database, migration_dir: Optional[str] = None) -> List[str]:
    """
    Apply every .sql file in folio/migrations not yet recorded in
    schema_migrations, in name order. Forward-only: each file runs in its
    own transaction together with its ledger row.

    Returns the filenames applied by this call.
    """
    migration_dir = migration_dir or MIGRATION_DIR

    if not database.is_connected:
        await database.connect()

    done = await applied_migrations(database)
    pending = sorted(f for f in os.listdir(migration_dir) if f.endswith(".sql") and f not in done)

    logger.info(f"[run_migrations] {len(done)} applied, {len(pending)} pending")

    for filename in pending:
        logger.info(f"[run_migrations] Applying migration: {filename}")

        with open(os.path.join(migration_dir, filename), "r") as f:
            sql = f.read()

        async with database.transaction():
            for stmt in split_statements(sql):
                await database.execute(stmt)
            await database.execute(
                "INSERT INTO schema_migrations (filename) VALUES (:filename)",
                {"filename": filename}
            )

    return pending
