#!/usr/bin/env python3
"""
Create a user (typically an administrator) directly in the configured database.

Usage:
  python scripts/create_user.py --username admin01 --role admin [--password ...] [--full-name ...] [--college ...]
"""
from __future__ import annotations

import argparse
import getpass
import sys

from campus_api.core.config import get_settings
from campus_api.core.errors import CampusError
from campus_api.db.session import Database
from campus_api.domain.roles import Role
from campus_api.repositories.sql_repository import SQLRepository
from campus_api.services.auth_service import AuthService
from campus_api.services.token_service import TokenService


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a campus activity user")
    ap.add_argument("--username", required=True, help="login name (at least 4 characters)")
    ap.add_argument("--password", help="password (prompted when omitted)")
    ap.add_argument("--full-name", default="", help="display name")
    ap.add_argument("--college", default="", help="college / faculty")
    ap.add_argument("--role", default=Role.STUDENT.value, choices=[r.value for r in Role])
    args = ap.parse_args()

    settings = get_settings()
    database = Database(settings.database_url)
    database.create_all()
    service = AuthService(SQLRepository(database), TokenService(settings.jwt_secret))

    password = args.password or getpass.getpass("Password: ")
    try:
        user = service.create_user(args.username, password, args.full_name, args.college, role=args.role)
    except CampusError as exc:
        raise SystemExit(f"Error: {exc.message}")
    finally:
        database.dispose()
    print("OK: user created")
    print(f"  id: {user.id}")
    print(f"  username: {user.username}")
    print(f"  role: {user.role}")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:  # pragma: no cover - CLI usage
        sys.stderr.write("aborted\n")
        raise SystemExit(1)
