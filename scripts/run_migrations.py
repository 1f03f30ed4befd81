"""
Create the SkillMatch schema and seed reference skills.
Run from project root: python -m scripts.run_migrations [--force]
"""
import argparse
import asyncio
import logging
import sys

from skillmatch.config import settings
from skillmatch.core.logging import setup_logging
from skillmatch.db.migrations import PRIMARY_TABLE, ensure_schema, tables_exist
from skillmatch.db.session import Database

logger = logging.getLogger("run_migrations")


async def run_migration(force: bool) -> int:
    """Run the migration once; returns the process exit code."""
    database = Database.from_settings(settings)
    try:
        async with database.engine.connect() as conn:
            exists = await tables_exist(conn)
        logger.info(f"Table '{PRIMARY_TABLE}' exists: {exists}")
        ran = await ensure_schema(database, force=force)
    except Exception as e:
        logger.error(f"Migration failed: {e}", exc_info=True)
        return 1
    finally:
        await database.dispose()

    if ran:
        logger.info("Migration completed successfully")
    else:
        logger.info("Schema already present, nothing to do (use --force to re-run)")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Create SkillMatch tables and seed skills")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-run every creation statement even if the schema already exists",
    )
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(run_migration(args.force)))


if __name__ == "__main__":
    main()
