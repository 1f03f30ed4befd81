"""
Schema initialization.

``ensure_schema`` is idempotent: it creates every table in foreign-key order
(users before anything that references it, skills before user_skills) and
seeds the reference skills, skipping rows that already exist by name. When
the primary table is already present the DDL is skipped unless ``force`` is
set, in which case every statement runs again; each one is individually
idempotent (create-if-missing, insert-on-conflict-do-nothing).

Any failure aborts the whole sequence and propagates: an unusable schema is
a fatal startup condition.
"""

from typing import List, Tuple

import structlog
from sqlalchemy import Table, inspect
from sqlalchemy.engine import Connection as SyncConnection
from sqlalchemy.ext.asyncio import AsyncConnection

from skillmatch.db.session import Database, insert_for
from skillmatch.models import Connection, Message, Profile, Project, Skill, User, UserSkill

logger = structlog.get_logger(__name__)

PRIMARY_TABLE = User.__tablename__

# Creation order respects foreign keys
TABLE_CREATION_ORDER: Tuple[Table, ...] = (
    User.__table__,
    Profile.__table__,
    Project.__table__,
    Connection.__table__,
    Message.__table__,
    Skill.__table__,
    UserSkill.__table__,
)

DEFAULT_SKILLS: List[Tuple[str, str]] = [
    ("JavaScript", "Programming"),
    ("TypeScript", "Programming"),
    ("React", "Frontend"),
    ("Node.js", "Backend"),
    ("Python", "Programming"),
    ("Java", "Programming"),
    ("C++", "Programming"),
    ("SQL", "Database"),
    ("MongoDB", "Database"),
    ("AWS", "Cloud"),
    ("Docker", "DevOps"),
    ("Git", "Version Control"),
    ("HTML", "Frontend"),
    ("CSS", "Frontend"),
    ("Vue.js", "Frontend"),
    ("Angular", "Frontend"),
    ("Express.js", "Backend"),
    ("Django", "Backend"),
    ("Flask", "Backend"),
    ("PostgreSQL", "Database"),
]


def _has_table(sync_conn: SyncConnection, table_name: str) -> bool:
    return inspect(sync_conn).has_table(table_name)


def _create_tables(sync_conn: SyncConnection) -> None:
    for table in TABLE_CREATION_ORDER:
        table.create(sync_conn, checkfirst=True)
        logger.info("table_ensured", table=table.name)


async def tables_exist(conn: AsyncConnection) -> bool:
    """Catalog check on the primary table."""
    return await conn.run_sync(_has_table, PRIMARY_TABLE)


async def seed_default_skills(conn: AsyncConnection) -> None:
    insert = insert_for(conn.dialect.name)
    stmt = (
        insert(Skill.__table__)
        .values([{"name": name, "category": category} for name, category in DEFAULT_SKILLS])
        .on_conflict_do_nothing(index_elements=["name"])
    )
    await conn.execute(stmt)
    logger.info("default_skills_seeded", count=len(DEFAULT_SKILLS))


async def ensure_schema(database: Database, force: bool = False) -> bool:
    """
    Create tables and seed reference data.

    Args:
        database: The Database whose engine is migrated.
        force: Re-run every creation statement even if the schema exists.

    Returns:
        True if the DDL ran, False if it was skipped because the schema exists.
    """
    async with database.engine.begin() as conn:
        if await tables_exist(conn) and not force:
            logger.info("schema_present_skipping_migrations", table=PRIMARY_TABLE)
            return False

        logger.info("running_migrations", force=force)
        await conn.run_sync(_create_tables)
        await seed_default_skills(conn)

    logger.info("migrations_completed")
    return True
