import os
import logging
from databases import Database

logger = logging.getLogger("starter.migrations")

MIGRATION_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")


async def run_migrations(database: Database, migration_dir: str = MIGRATION_DIR):
    """
    Executes every .sql file in starter/migrations in name order.
    A simple forward-only migration runner; statements must be idempotent.
    """
    if not database.is_connected:
        await database.connect()

    files = sorted(f for f in os.listdir(migration_dir) if f.endswith(".sql"))
    logger.info(f"Found {len(files)} migration files.")

    for filename in files:
        with open(os.path.join(migration_dir, filename), "r") as f:
            sql = f.read()

        statements = [s.strip() for s in sql.split(";") if s.strip()]
        logger.info(f"Applying migration: {filename} ({len(statements)} statements)")

        async with database.transaction():
            for stmt in statements:
                await database.execute(stmt)

    logger.info("All migrations applied.")
