"""Database package: engine, session factory and the Database handle shared by repositories."""

import threading
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from src.config import DATABASE_URL
from src.db.base import Base

# Import all models so Base.metadata has all tables
from src.db.models import (  # noqa: F401
    ContactRecord,
    EmailTemplate,
    FeedbackRecord,
)


def _get_engine(url: str):
    """Create engine with check_same_thread=False for use from executor threads."""
    if url.startswith("sqlite"):
        if "?" in url:
            url += "&check_same_thread=False"
        else:
            url += "?check_same_thread=False"
    return create_engine(url, echo=False)


class Database:
    """Owns one engine and session factory. Tables are created lazily on first session."""

    def __init__(self, url: str | None = None):
        self.url = url or DATABASE_URL
        self._init_lock = threading.Lock()
        self._engine = None
        self._SessionLocal: sessionmaker | None = None

    def init(self) -> None:
        """Create engine and tables. Safe to call repeatedly."""
        with self._init_lock:
            if self._SessionLocal is not None:
                return
            engine = _get_engine(self.url)
            Base.metadata.create_all(bind=engine)
            self._engine = engine
            self._SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context manager yielding a DB session. Commits on success, rolls back on error."""
        self.init()
        session = self._SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> None:
        """Run a trivial query; raises when the database is unreachable."""
        with self.session() as session:
            session.execute(text("SELECT 1"))

    def dispose(self) -> None:
        with self._init_lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._SessionLocal = None
