from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url


@dataclass(frozen=True)
class ConnectionInfo:
    host: str = "localhost"
    user: str = "postgres"
    dbname: str = "tests"
    tls: bool = False

    port: int = 5432
    password: Optional[str] = None

    # Full SQLAlchemy URL; when set, the fields above are ignored.
    url: Optional[str] = None

    @property
    def database_url(self) -> URL:
        if self.url:
            return make_url(self.url)
        return URL.create(
            "postgresql+psycopg2",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.dbname,
        )

    @property
    def connect_args(self) -> dict:
        url = self.database_url
        backend = url.get_backend_name()
        if backend == "postgresql":
            # an sslmode in the URL query wins over the tls flag
            if "sslmode" in url.query:
                return {}
            return {"sslmode": "require" if self.tls else "disable"}
        if backend == "sqlite":
            return {"check_same_thread": False}
        return {}


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getbool(name: str, default: str = "false") -> bool:
    return (_getenv(name, default) or default).lower() in ("1", "true", "yes", "on")


def get_config() -> ConnectionInfo:
    """
    Reads the connection options from the environment.
    - Loads `.env` if present, without overriding variables already set
    - USERSTORE_DATABASE_URL takes precedence over the individual fields
    """
    load_dotenv(override=False)

    return ConnectionInfo(
        host=_getenv("USERSTORE_HOST", "localhost") or "localhost",
        user=_getenv("USERSTORE_USER", "postgres") or "postgres",
        dbname=_getenv("USERSTORE_DBNAME", "tests") or "tests",
        tls=_getbool("USERSTORE_TLS"),
        port=int(_getenv("USERSTORE_PORT", "5432") or "5432"),
        password=_getenv("USERSTORE_PASSWORD"),
        url=_getenv("USERSTORE_DATABASE_URL"),
    )


def get_log_level() -> str:
    """Level name from USERSTORE_LOG_LEVEL; unknown names fall back to WARNING."""
    load_dotenv(override=False)
    level = (_getenv("USERSTORE_LOG_LEVEL", "WARNING") or "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "WARNING"
    return level
