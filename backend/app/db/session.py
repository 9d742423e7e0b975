"""Engine and session factory configuration."""

from collections.abc import Generator
import logging
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from app.core.config import Settings, get_settings
from app.db.base import Base

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(settings: Settings) -> Engine:
    """Create an engine tuned for the configured backend.

    PostgreSQL gets a pre-pinged, recycled connection pool with TCP
    keepalives. SQLite (used for local runs and tests) shares a single
    connection so an in-memory database survives across sessions.
    """
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "future": True}
    if settings.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            poolclass=QueuePool,
            pool_pre_ping=True,  # Test connections before using
            pool_recycle=1800,  # Recycle connections after 30 minutes
            pool_size=5,
            max_overflow=10,
            connect_args={
                "connect_timeout": 10,
                "keepalives": 1,
                "keepalives_idle": 30,
                "keepalives_interval": 10,
                "keepalives_count": 5,
            },
        )
    return create_engine(settings.database_url, **kwargs)


engine = build_engine(settings)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(bind: Engine | None = None) -> None:
    """Create missing tables. Existing tables are left untouched."""
    import app.db.models  # noqa: F401  registers models on Base.metadata

    target = bind or engine
    logger.info(f"Ensuring database schema on {target.url.render_as_string(hide_password=True)}")
    Base.metadata.create_all(bind=target)


def get_db() -> Generator[Session, None, None]:
    """Yield a transactional session for request lifecycles."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
