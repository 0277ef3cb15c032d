"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine used by the SQL
repositories. The URL comes from `config.settings` (a local SQLite file
`quiz.db` at the repository root by default) and can be overridden per
call, which is how tests get an in-memory database.
"""

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from .config import settings
from . import models  # noqa: F401  registers the tables on SQLModel.metadata


def make_engine(url: str | None = None, echo: bool | None = None):
    """Create an engine for `url` (defaults to the configured database).

    SQLite connections are shared across threads; an in-memory SQLite
    URL additionally uses a single static connection so every session
    sees the same database.
    """
    url = url or settings.DATABASE_URL
    echo = settings.SQL_ECHO if echo is None else echo
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.rstrip("/") in ("sqlite:", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **kwargs)


def create_db_and_tables(engine):
    """Create the quiz and user tables if they are missing.

    Intended for local development and tests; schema changes in a real
    deployment belong to a migration tool.
    """
    SQLModel.metadata.create_all(engine)
