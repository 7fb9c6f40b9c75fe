"""Database connection and initialization."""

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from handytrack.config import settings

# Import all models so SQLModel registers them
import handytrack.models  # noqa: F401


def create_db_engine(url: str, **kwargs) -> Engine:
    """Create a SQLite engine with per-connection pragmas applied."""
    new_engine = create_engine(
        url,
        echo=settings.debug,
        connect_args={"check_same_thread": False},
        **kwargs,
    )

    @event.listens_for(new_engine, "connect")
    def _set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return new_engine


engine = create_db_engine(f"sqlite:///{settings.db_path}")


def init_db(target: Engine | None = None) -> None:
    """Create all tables."""
    SQLModel.metadata.create_all(target or engine)


def get_session():
    """FastAPI dependency: yields a database session."""
    with Session(engine) as session:
        yield session
