"""Database connection settings and schema setup."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker

from productapi.models import Base

logger = logging.getLogger(__name__)

MAX_IDLE_CONNECTIONS = 5
MAX_OPEN_CONNECTIONS = 10
CONNECTION_LIFETIME_SECONDS = 60 * 60


def database_url(environ: Mapping[str, str] | None = None) -> str:
    """Build the MySQL URL from the DB_* settings of the environment."""
    env = os.environ if environ is None else environ
    port = env.get("DB_PORT", "")
    url = URL.create(
        "mysql+pymysql",
        username=env.get("DB_USERNAME", "") or None,
        password=env.get("DB_PASSWORD", "") or None,
        host=env.get("DB_HOST", "") or None,
        port=int(port) if port else None,
        database=env.get("DB_DATABASE", "") or None,
        query={"charset": "utf8mb4"},
    )
    return url.render_as_string(hide_password=False)


def init_db(url: str | URL | None = None) -> sessionmaker[Session]:
    """Connect, create the tables and return a session factory."""
    target = make_url(url if url is not None else database_url())
    options = {}
    if target.get_backend_name() != "sqlite":
        options = {
            "pool_size": MAX_IDLE_CONNECTIONS,
            "max_overflow": MAX_OPEN_CONNECTIONS - MAX_IDLE_CONNECTIONS,
            "pool_recycle": CONNECTION_LIFETIME_SECONDS,
        }
    engine = create_engine(target, **options)
    Base.metadata.create_all(engine)
    logger.info("Database connected and migration completed")
    return sessionmaker(bind=engine, expire_on_commit=False)