"""
Configuration helpers for the campus activity backend.

Settings are selected by APP_ENV. An optional JSON file (CONFIG_FILE, default
config/config.json) may hold one section per environment; environment
variables always win over file values.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import json
import os

DEFAULT_ENV = "dev"
DEFAULT_CONFIG_FILE = "config/config.json"
DEV_JWT_SECRET = "dev-only-campus-activity-secret-change-me"


class ConfigError(RuntimeError):
    """Raised when the selected environment cannot be configured."""


@dataclass(frozen=True)
class Settings:
    """Typed view of the environment."""

    app_env: str
    database_url: str
    jwt_secret: str
    token_ttl_seconds: int
    db_pool_size: int
    db_pool_recycle_seconds: int
    cors_origins: tuple[str, ...]
    log_level: str
    admin_status_targets: tuple[str, ...]
    auto_create_tables: bool

    @property
    def is_prod(self) -> bool:
        return self.app_env in {"prod", "production"}


def _int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _csv(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(",")
    return tuple(item.strip() for item in items if str(item).strip())


def load_file_section(env: str, path: str | None = None) -> dict:
    """Return the section for ``env`` from the JSON config file, or {} when there is no file."""
    file_path = Path(path or os.getenv("CONFIG_FILE") or DEFAULT_CONFIG_FILE)
    if not file_path.exists():
        return {}
    try:
        with file_path.open("r", encoding="utf-8") as f:
            sections = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"could not read {file_path}: {exc}") from exc
    if not isinstance(sections, dict) or env not in sections:
        raise ConfigError(f"configuration for environment '{env}' not found in {file_path}")
    section = sections[env]
    if not isinstance(section, dict):
        raise ConfigError(f"configuration for environment '{env}' must be an object")
    return section


def build_settings(environ: dict | None = None) -> Settings:
    """Build Settings from an environment mapping (defaults to os.environ)."""
    env_vars = os.environ if environ is None else environ
    app_env = (env_vars.get("APP_ENV") or DEFAULT_ENV).strip().lower()
    section = load_file_section(app_env, env_vars.get("CONFIG_FILE"))

    def pick(env_name: str, key: str, default=None):
        value = env_vars.get(env_name)
        if value not in (None, ""):
            return value
        return section.get(key, default)

    prod = app_env in {"prod", "production"}
    jwt_secret = str(pick("JWT_SECRET", "jwt_secret", "") or "")
    if not jwt_secret:
        if prod:
            raise ConfigError("JWT_SECRET must be configured in production")
        jwt_secret = DEV_JWT_SECRET

    return Settings(
        app_env=app_env,
        database_url=str(pick("DATABASE_URL", "database_url", "sqlite:///./campus.db")).strip(),
        jwt_secret=jwt_secret,
        token_ttl_seconds=_int(pick("TOKEN_TTL_SECONDS", "token_ttl_seconds"), 86400),
        db_pool_size=max(1, _int(pick("DB_POOL_SIZE", "db_pool_size"), 10)),
        db_pool_recycle_seconds=_int(pick("DB_POOL_RECYCLE_SECONDS", "db_pool_recycle_seconds"), 180),
        cors_origins=_csv(pick("CORS_ORIGINS", "cors_origins", "http://localhost:5173")),
        log_level=str(pick("LOG_LEVEL", "log_level", "INFO")).upper(),
        admin_status_targets=_csv(pick("ADMIN_STATUS_TARGETS", "admin_status_targets", "pending,approved,rejected")),
        auto_create_tables=_bool(pick("AUTO_CREATE_TABLES", "auto_create_tables"), not prod),
    )


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return build_settings()
