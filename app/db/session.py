from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import settings


def _is_postgresql(url: str) -> bool:
    lowered = url.lower()
    return "postgresql" in lowered or "postgres" in lowered


def _validate_postgresql_driver() -> None:
    """Validate PostgreSQL driver is installed when using PostgreSQL.

    Must actually import psycopg2 (not just find_spec) because SQLAlchemy
    will try to import it when creating the engine.
    """
    try:
        import psycopg2  # noqa: F401

        logger.info("PostgreSQL driver (psycopg2) is available")
    except ImportError as e:
        logger.error("PostgreSQL driver (psycopg2) is not installed. Install the 'postgres' extra.")
        raise ImportError("PostgreSQL driver required. Install with: pip install psycopg2-binary") from e


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine with connection args suited to the backend in use."""
    connect_args = {}
    if "sqlite" in database_url.lower():
        connect_args = {"check_same_thread": False}
    elif _is_postgresql(database_url):
        _validate_postgresql_driver()
        connect_args = {
            "connect_timeout": 10,
            "application_name": "trip-planner",
        }

    engine = create_engine(
        database_url,
        connect_args=connect_args,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=3600,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


# Lazy initialization to avoid import-time database connections
_engine = None
_SessionLocal = None


def _get_engine():
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {settings.database_url}")
        if not _is_postgresql(settings.database_url):
            logger.warning("Using SQLite database (local development only)")
        _engine = build_engine(settings.database_url)
        logger.info("Database engine initialized")
    return _engine


def get_engine():
    """Get or create the database engine (public API)."""
    return _get_engine()


def _get_session_local():
    """Get or create the session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=_get_engine())
        logger.info("Database session factory initialized")
    return _SessionLocal


def check_database_connection() -> None:
    """Test database connection on startup."""
    try:
        with _get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection test successful")
    except Exception as e:
        logger.error(f"Database connection test failed: {e}")
        raise


def get_db() -> Generator[Session, None, None]:
    """Get database session for FastAPI dependencies.

    This is a plain generator function (NOT a context manager) that FastAPI
    can use directly with Depends(). It is meant for read-only endpoints;
    anything that writes goes through get_session() so that the write is
    committed or rolled back as one unit.

    Yields:
        Session: SQLAlchemy database session
    """
    session = _get_session_local()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get database session context manager.

    The block is one transaction: it is committed when the block exits
    normally and rolled back when the block raises, after which the
    exception propagates unchanged. Bulk UPDATE/DELETE statements do not
    mark the session dirty, so the commit is unconditional.
    """
    session = _get_session_local()()
    try:
        yield session
        session.commit()
    except Exception as e:
        logger.debug(f"Rolling back session after {type(e).__name__}")
        session.rollback()
        raise
    finally:
        session.close()
