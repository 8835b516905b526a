# Database Configuration and Session Management

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from contextlib import contextmanager
import logging

from config.app_config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)


def build_engine(url: str = DATABASE_URL):
    """Create an engine; SQLite gets thread-sharing enabled for the test client."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, echo=SQL_ECHO)
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=SQL_ECHO  # Set SQL_ECHO=true for SQL query logging
    )


# Create engine
engine = build_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency for FastAPI
def get_db() -> Session:
    """
    FastAPI dependency to get database session.
    Usage: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context():
    """
    Context manager for database session.
    Usage:
    with get_db_context() as db:
        # do something with db
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind=None):
    """
    Initialize database tables.
    Run this once to create all tables.
    """
    from database.models import Base
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})


if __name__ == "__main__":
    # Create tables when run directly
    init_db()
