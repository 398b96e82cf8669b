"""Database engine and helpers.

This module builds the SQLModel/SQLAlchemy engine for the single-file
SQLite store and provisions the schema. SQLite only enforces foreign keys
(and therefore the cascade / set-null rules on the tables) when the
`foreign_keys` pragma is switched on for each connection, so every engine
created here installs a connect hook that does so.
"""

import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine
from fastapi import Request

from . import models  # noqa: F401  registers the tables on SQLModel.metadata

logger = logging.getLogger("studyplanner.database")


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def make_engine(db_path: Path, echo: bool = False) -> Engine:
    """Return an engine for the SQLite file at `db_path`.

    The file is created by SQLite on first connect if it does not exist.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=echo,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def create_db_and_tables(engine: Engine) -> None:
    """Create any missing tables.

    Existing tables are left untouched, so calling this repeatedly is a
    no-op. Errors (unopenable file, rejected DDL) propagate to the caller.
    """
    SQLModel.metadata.create_all(engine)
    logger.info("Connected to SQLite database at %s", engine.url.database)


def get_session(request: Request):
    """Yield a database `Session` bound to the application's engine.

    The session is closed (and any open transaction rolled back) when the
    request scope finishes.
    """
    with Session(request.app.state.engine) as session:
        yield session
