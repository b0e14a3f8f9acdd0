from contextlib import contextmanager
from typing import Optional
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from registrar.config import settings

Base = declarative_base()


def make_engine(database_url: Optional[str] = None, echo: Optional[bool] = None):
    """
    Create an engine for the given URL (defaults to configured settings).
    SQLite connections get a busy timeout so concurrent writers wait
    instead of failing, and foreign keys are switched on.
    """
    url = database_url or settings.database_url
    connect_args = {}
    if url.startswith("sqlite"):
        # For sqlite: allow multithread
        connect_args = {"check_same_thread": False, "timeout": settings.sqlite_timeout}

    engine = create_engine(
        url,
        echo=settings.sql_echo if echo is None else echo,
        connect_args=connect_args,
    )

    if url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False,
                            expire_on_commit=False)


def init_db(bind=None):
    """Create all tables if they don't exist yet."""
    from registrar import models  # noqa: F401  registers every table on Base
    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def get_db():
    """Yield a session; commit on success, roll back on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
