"""Utility script to create the database schema for the selected environment."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from campus_api.core.config import get_settings

from .session import Database


def create_all(database: Database | None = None) -> None:
    if database is None:
        settings = get_settings()
        database = Database(settings.database_url)
    database.create_all()


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
