"""
Lunchbox API - Database Configuration.

SQLAlchemy engine, session factory, and declarative base for ORM models.
PostgreSQL in production, SQLite for local development and tests.
LAZY INITIALIZATION: Engine connects on first use, not at import time.
"""

from typing import Generator, Optional
import logging

from sqlalchemy import create_engine, event, text, Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from settings import settings

logger = logging.getLogger(__name__)

# Declarative base for ORM models
Base = declarative_base()

# Global engine and session factory (initialized lazily)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_in_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def get_engine() -> Engine:
    """
    Get or create the SQLAlchemy engine (lazy initialization).

    Creates engine with connection pooling and validation for PostgreSQL.
    SQLite engines get foreign-key enforcement so referential conflicts
    behave the same as in production; in-memory databases share a single
    connection so every session sees the same data.

    Returns:
        Engine: SQLAlchemy engine instance.
    """
    global _engine
    if _engine is None:
        logger.info("Creating database engine...")
        try:
            if settings.DATABASE_URL.startswith("sqlite"):
                extra = {}
                if _is_in_memory(settings.DATABASE_URL):
                    extra["poolclass"] = StaticPool
                _engine = create_engine(
                    settings.DATABASE_URL,
                    echo=False,
                    connect_args={"check_same_thread": False},  # SQLite specific
                    **extra,
                )
                event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
            else:
                # PostgreSQL with connection pooling and validation
                _engine = create_engine(
                    settings.DATABASE_URL,
                    echo=False,
                    pool_size=5,
                    max_overflow=10,
                    pool_pre_ping=True,      # Validate connections before use
                    pool_recycle=3600,       # Recycle connections every hour
                    connect_args={
                        "connect_timeout": 10,
                        "application_name": "lunchbox-api",
                    },
                )
            logger.info("Database engine created successfully")
        except Exception as e:
            logger.error(f"Failed to create database engine: {e}")
            raise
    return _engine


def get_session_factory() -> sessionmaker:
    """
    Get or create the session factory (lazy initialization).

    Returns:
        sessionmaker: SQLAlchemy session factory.
    """
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
    return _SessionLocal


def init_db() -> None:
    """Create all tables that do not exist yet."""
    # Register models on Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database schema ensured")


def ping() -> bool:
    """Test database connectivity."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database ping failed: {e}")
        return False


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Yields a database session and ensures proper cleanup after request.
    Any transaction left open by a failed request is rolled back on close.

    Yields:
        Session: SQLAlchemy database session.

    Example:
        @router.get("/menu")
        def list_menu(db: Session = Depends(get_db)):
            return db.query(MenuItem).all()
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
