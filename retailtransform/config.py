"""
Runtime configuration.

Settings are read once from the environment into explicit objects. The store
credentials only ever reach `database.open_store()`; the pipeline itself gets
an already-open session.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

from .errors import ConfigError
from .models import DEFAULT_ROLE_FILTER, RoleFilter

POSTGRES_DRIVER = "postgresql+psycopg2"
DEFAULT_SSLMODE = "require"
DEFAULT_PORT = 5432

REQUIRED_DB_VARS = ["DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the source store."""

    host: Optional[str] = None
    port: int = DEFAULT_PORT
    user: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    name: Optional[str] = None
    sslmode: str = DEFAULT_SSLMODE
    # Full SQLAlchemy URL; overrides the individual fields when set.
    database_url: Optional[str] = field(default=None, repr=False)

    def url(self) -> URL:
        """
        Build the SQLAlchemy URL for this configuration.

        Raises:
            ConfigError: If DATABASE_URL cannot be parsed
        """
        if self.database_url:
            try:
                return make_url(self.database_url)
            except ArgumentError as e:
                raise ConfigError(f"Invalid DATABASE_URL: {e}") from e

        return URL.create(
            POSTGRES_DRIVER,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
            query={"sslmode": self.sslmode},
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "DatabaseConfig":
        database_url = environ.get("DATABASE_URL", "").strip()
        if database_url:
            return cls(database_url=database_url)

        missing: List[str] = [
            name for name in REQUIRED_DB_VARS if not environ.get(name, "").strip()
        ]
        if missing:
            raise ConfigError(
                "Missing database settings: " + ", ".join(missing)
                + " (or set DATABASE_URL)"
            )

        raw_port = environ.get("DB_PORT", "").strip() or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ConfigError(f"DB_PORT must be an integer, got {raw_port!r}") from e

        return cls(
            host=environ["DB_HOST"].strip(),
            port=port,
            user=environ["DB_USER"].strip(),
            password=environ["DB_PASSWORD"],
            name=environ["DB_NAME"].strip(),
            sslmode=environ.get("DB_SSLMODE", "").strip() or DEFAULT_SSLMODE,
        )


@dataclass(frozen=True)
class Settings:
    """Everything the CLI needs for one run."""

    database: DatabaseConfig
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    role_filter: RoleFilter = DEFAULT_ROLE_FILTER


def _log_level(environ: Mapping[str, str]) -> str:
    level = environ.get("LOG_LEVEL", "").strip().upper() or "INFO"
    if level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got {level!r}"
        )
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from the environment.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigError: On missing or malformed values
    """
    if environ is None:
        environ = os.environ

    log_dir = environ.get("LOG_DIR", "").strip()
    role_filter = RoleFilter(
        include=environ.get("AUTHOR_ROLE_PATTERN") or DEFAULT_ROLE_FILTER.include,
        exclude=environ.get("EXCLUDED_AUTHOR_ROLE_PATTERN") or DEFAULT_ROLE_FILTER.exclude,
    )

    return Settings(
        database=DatabaseConfig.from_env(environ),
        log_level=_log_level(environ),
        log_dir=Path(log_dir) if log_dir else None,
        role_filter=role_filter,
    )
