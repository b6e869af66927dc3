"""Integration tests for database functionality.

Tests engine configuration, table creation, migrations and helpers against a
temporary SQLite file per test.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest
from sqlalchemy import text

from dominion import database
from dominion.config import Settings
from dominion.database import (
    check_database_health,
    count_rows,
    create_db_engine,
    create_session_factory,
    get_table_names,
    init_db,
)
from dominion.models import Base, Race

EXPECTED_TABLES = {
    "rounds",
    "races",
    "realms",
    "dominions",
    "queue_exploration",
    "queue_construction",
    "queue_training",
    "active_spells",
    "daily_rankings",
    "dominion_history",
}


@pytest.fixture(scope="module")
def project_root():
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


@pytest.fixture
def file_engine(tmp_path):
    engine = create_db_engine(Settings(database_url=f"sqlite:///{tmp_path / 'db.sqlite'}"))
    yield engine
    engine.dispose()


def test_init_db_creates_all_tables(file_engine):
    assert get_table_names(file_engine) == []

    init_db(file_engine)

    assert set(get_table_names(file_engine)) == EXPECTED_TABLES
    assert set(Base.metadata.tables) == EXPECTED_TABLES


def test_sqlite_pragmas(file_engine):
    with file_engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"


def test_database_health(file_engine, tmp_path):
    assert check_database_health(file_engine) is True

    broken = create_db_engine(
        Settings(database_url=f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}")
    )
    try:
        assert check_database_health(broken) is False
    finally:
        broken.dispose()


def test_count_rows(file_engine):
    init_db(file_engine)
    factory = create_session_factory(file_engine)

    with factory.begin() as session:
        session.add_all([Race(name="Human"), Race(name="Nomad")])

    with factory() as session:
        assert count_rows(session, "races") == 2
        assert count_rows(session, "dominions") == 0
        with pytest.raises(ValueError, match="Invalid table name"):
            count_rows(session, "users")


def test_session_factory_does_not_autoflush(file_engine):
    factory = create_session_factory(file_engine)

    with factory() as session:
        assert session.autoflush is False


def test_global_session_factory_is_shared(file_engine, monkeypatch):
    monkeypatch.setattr(database, "_engine", file_engine)
    monkeypatch.setattr(database, "_SessionLocal", None)

    factory = database.get_session_factory()

    assert database.get_session_factory() is factory
    assert factory.kw["bind"] is file_engine
    with factory() as session:
        assert session.execute(text("SELECT 1")).scalar_one() == 1


def test_alembic_migrations_match_models(project_root, tmp_path):
    db_path = tmp_path / "migrated.db"
    env = {**os.environ, "DATABASE_URL": f"sqlite:///{db_path}"}

    # Run migrations using the current interpreter to avoid external wrappers
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        check=False,
        cwd=project_root,
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0, result.stderr

    engine = create_db_engine(Settings(database_url=f"sqlite:///{db_path}"))
    try:
        assert set(get_table_names(engine)) == EXPECTED_TABLES | {"alembic_version"}
    finally:
        engine.dispose()
