# database.py

import logging
import threading
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)

# sqlite needs check_same_thread off for FastAPI's threadpool
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    echo=SQL_ECHO,
    connect_args=connect_args,
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Declarative base
Base = declarative_base()


# FastAPI dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session):
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


# One writer at a time inside this process; the row locks taken by each
# write cover other processes sharing the database.
_write_lock = threading.RLock()


@contextmanager
def serialized_write(db: Session):
    with _write_lock:
        with atomic(db):
            yield db


def create_tables(bind=None):
    # importing the models registers them on Base.metadata
    import model.violation_model  # noqa: F401
    import model.ledger_state_model  # noqa: F401
    import model.fine_schedule_model  # noqa: F401
    import model.pauser_model  # noqa: F401
    import model.event_model  # noqa: F401
    import model.transaction_model  # noqa: F401
    import model.violation_type_model  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("[DB] Tables ready on %s", (bind or engine).url)
