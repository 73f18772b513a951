"""Database engine and session helpers for the SQL storage backends.

Engines are created explicitly from settings at startup and handed to the
backends that need them, so nothing touches the database on import. Tables
are created on startup with ``init_db``; there is no migration tooling.
"""

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, text
from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a new engine for the given URL.

    SQLite engines allow use from worker threads; in-memory SQLite shares one
    connection so every session sees the same database.

    Args:
        database_url: SQLAlchemy database URL
        echo: Enable SQL query logging

    Raises:
        ValueError: if the database URL is empty
    """
    if not database_url:
        raise ValueError("Database URL missing: provide CONDUIT_DATABASE_URL")

    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if _is_memory_sqlite(database_url):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            echo=echo,
            connect_args={"connect_timeout": 10},
        )

    logger.info(f"SQL echo is {'enabled' if echo else 'disabled'}")
    return engine


def init_db(engine: Engine) -> None:
    """Create all tables registered on the SQLModel metadata."""
    # Import for side effect: table registration on SQLModel.metadata
    from conduit.database import models  # noqa: F401

    logger.info("Initializing database tables...")
    SQLModel.metadata.create_all(engine)


def dispose_db(engine: Engine | None) -> None:
    """Dispose of the engine's connection pool if there is one."""
    if engine is not None:
        logger.info("Closing database connections")
        engine.dispose()


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
    retry=retry_if_exception_type(Exception),
    before_sleep=before_sleep_log(logger, "DEBUG"),
)
def _create_session(engine: Engine) -> Session:
    """Create a database session with retry logic.

    The connection pool is disposed on failure so the next attempt opens
    fresh connections.

    Returns:
        Session: A new database session

    Raises:
        Exception: If all retry attempts fail
    """
    try:
        session = Session(engine)
        session.execute(text("SELECT 1"))
        return session
    except Exception as e:
        logger.warning(f"Database connection failed, disposing pool for retry: {e}")
        engine.dispose()
        raise


@contextmanager
def borrow_db_session(engine: Engine) -> Generator[Session, None, None]:
    """Context manager yielding a session that is always closed afterwards.

    Example:
        with borrow_db_session(engine) as session:
            session.add(record)
            session.commit()
    """
    session = _create_session(engine)
    session_id = id(session)

    try:
        yield session
    except Exception as e:
        logger.error(f"Error during database session {session_id}: {e}")
        session.rollback()
        raise
    finally:
        session.close()
        logger.trace(f"Database session {session_id} closed and resources released")
