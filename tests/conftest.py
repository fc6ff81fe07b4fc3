from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the campus_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from campus_api.core.config import Settings  # noqa: E402
from campus_api.db.session import Database  # noqa: E402
from campus_api.repositories.sql_repository import SQLRepository  # noqa: E402
from campus_api.services.token_service import TokenService  # noqa: E402

TEST_SECRET = "test-secret-for-campus-activity-tokens-0123456789"


@pytest.fixture()
def database(tmp_path):
    """A throwaway SQLite database with the schema created; disposed after the test."""
    db_file = tmp_path / "test.db"
    db = Database(f"sqlite:///{db_file}")
    db.create_all()
    yield db
    try:
        db.drop_all()
    finally:
        db.dispose()


@pytest.fixture()
def repo(database):
    return SQLRepository(database)


@pytest.fixture()
def token_secret():
    return TEST_SECRET


@pytest.fixture()
def tokens(token_secret):
    return TokenService(token_secret)


@pytest.fixture()
def make_settings(tmp_path):
    def _make(**overrides) -> Settings:
        values = dict(
            app_env="test",
            database_url=f"sqlite:///{tmp_path / 'app.db'}",
            jwt_secret=TEST_SECRET,
            token_ttl_seconds=86400,
            db_pool_size=5,
            db_pool_recycle_seconds=180,
            cors_origins=("http://localhost:5173",),
            log_level="INFO",
            admin_status_targets=("pending", "approved", "rejected"),
            auto_create_tables=True,
        )
        values.update(overrides)
        return Settings(**values)

    return _make
