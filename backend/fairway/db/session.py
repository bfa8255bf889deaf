"""
Engine and session factory.

MySQL is the deployed database; a sqlite URL works for local runs and
gets the thread-check override FastAPI's threadpool needs.
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from fairway.core.config import settings
from fairway.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_engine(
            database_url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False}
        )
    return create_engine(
        database_url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_recycle=3600
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Request-scoped session; always closed after the response."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create every trip, roster, ledger and itinerary table that is missing."""
    import fairway.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready on {engine.url.render_as_string(hide_password=True)}")
