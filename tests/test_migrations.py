import pytest
from sqlalchemy import CheckConstraint, Column, Integer, MetaData, Table, func, inspect, select
from sqlalchemy.exc import OperationalError

from skillmatch.db import migrations
from skillmatch.db.migrations import DEFAULT_SKILLS, TABLE_CREATION_ORDER, ensure_schema
from skillmatch.db.session import Database
from skillmatch.models import Skill, User


async def _skill_count(db: Database) -> int:
    async with db.transaction() as session:
        return await session.scalar(select(func.count()).select_from(Skill))


async def _table_names(db: Database):
    async with db.engine.connect() as conn:
        return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))


@pytest.fixture
async def fresh_database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
    yield db
    await db.dispose()


async def test_creates_all_tables_and_seeds_skills(fresh_database):
    assert await ensure_schema(fresh_database) is True

    assert await _table_names(fresh_database) == {table.name for table in TABLE_CREATION_ORDER}
    assert await _skill_count(fresh_database) == len(DEFAULT_SKILLS) == 20


async def test_second_run_is_skipped(fresh_database):
    await ensure_schema(fresh_database)

    assert await ensure_schema(fresh_database) is False
    assert await _skill_count(fresh_database) == 20


async def test_forced_run_is_idempotent(fresh_database):
    await ensure_schema(fresh_database)

    assert await ensure_schema(fresh_database, force=True) is True
    assert await ensure_schema(fresh_database, force=True) is True
    assert await _skill_count(fresh_database) == 20


async def test_forced_run_restores_missing_seed_rows(fresh_database):
    await ensure_schema(fresh_database)
    async with fresh_database.transaction() as session:
        await session.execute(Skill.__table__.delete().where(Skill.name == "Python"))

    await ensure_schema(fresh_database, force=True)

    async with fresh_database.transaction() as session:
        python = await session.scalar(select(Skill).where(Skill.name == "Python"))
    assert python is not None
    assert python.category == "Programming"


async def test_failing_ddl_aborts_whole_sequence(fresh_database, monkeypatch):
    broken = Table(
        "broken",
        MetaData(),
        Column("id", Integer, primary_key=True),
        CheckConstraint("id >"),
    )
    monkeypatch.setattr(migrations, "TABLE_CREATION_ORDER", (User.__table__, broken))

    with pytest.raises(OperationalError):
        await ensure_schema(fresh_database)

    # users was created before the failure and must not survive it
    assert await _table_names(fresh_database) == set()


async def test_failing_seed_rolls_back_tables(fresh_database, monkeypatch):
    async def fail_seed(conn):
        raise RuntimeError("seed failed")

    monkeypatch.setattr(migrations, "seed_default_skills", fail_seed)

    with pytest.raises(RuntimeError, match="seed failed"):
        await ensure_schema(fresh_database)

    assert await _table_names(fresh_database) == set()

    monkeypatch.undo()
    assert await ensure_schema(fresh_database) is True
    assert await _skill_count(fresh_database) == 20
