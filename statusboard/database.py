"""Database handle and session management."""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base: Any = declarative_base()

# Largest value an INTEGER primary key column can hold
MAX_ID = 2**31 - 1


class Database:
    """Owns the engine and session factory for one application instance.

    Created at startup, handed to request handlers through ``get_db`` and
    disposed at shutdown.
    """

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 10) -> None:
        self.url = url
        engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow

        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Generator[Session, None, None]:
        """Yield a session that is closed when the caller is done."""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def create_all(self) -> None:
        """Create all tables registered on ``Base.metadata``."""
        # Import all models here so they are registered with Base.metadata
        from statusboard import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Release every pooled connection."""
        logger.info("Disposing database connection pool")
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session from the app's handle."""
    database: Database = request.app.state.database
    yield from database.session()
