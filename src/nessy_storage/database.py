import logging
from pathlib import Path

from sqlalchemy import Engine, event
from sqlmodel import SQLModel, create_engine, text

import nessy_storage.models  # noqa: F401  register all tables with SQLModel

logger = logging.getLogger(__name__)


def create_db_engine(db_path: Path) -> Engine:
    """Open the SQLite database at *db_path*, creating its directory if needed."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"timeout": 30, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()

    return engine


def create_db_and_tables(engine: Engine) -> None:
    """Create the roms, saves and title_screens tables.

    Runs once per open; existing tables are left untouched and there is no
    upgrade path for their schema.
    """
    SQLModel.metadata.create_all(engine)
    if engine.dialect.name == "sqlite" and engine.url.database not in (None, "", ":memory:"):
        with engine.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.commit()
    logger.info("Database ready at %s", engine.url)
