# app/core/database.py

import datetime
import json
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings
from app.core.exceptions import QueryTimeoutError

log = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# PostgreSQL reports a cancelled statement with this SQLSTATE.
QUERY_CANCELED_PGCODE = "57014"


def custom_json_serializer(obj):
    return json.dumps(obj, ensure_ascii=False)


engine = create_engine(SQLALCHEMY_DATABASE_URL, json_serializer=custom_json_serializer)

# Create a SessionLocal class. Each instance of this class will be
# a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# All models inherit from this Base class so that Alembic finds them.
Base = declarative_base()


def get_db() -> Generator:
    """
    Dependency to get a database session.
    The session is created and then closed after the request is finished.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def is_postgres(db: Session) -> bool:
    return db.get_bind().dialect.name == "postgresql"


@contextmanager
def statement_timeout(db: Session, timeout_ms: int):
    """
    Caps the execution time of every statement issued inside the block.

    Only PostgreSQL supports a per-transaction cap (``SET LOCAL``); other
    dialects run the block unchanged. A cancelled statement surfaces as
    ``QueryTimeoutError`` instead of a driver error.
    """
    if is_postgres(db):
        db.execute(text(f"SET LOCAL statement_timeout = {int(timeout_ms)}"))
    try:
        yield
    except OperationalError as e:
        if getattr(e.orig, "pgcode", None) == QUERY_CANCELED_PGCODE:
            log.warning("Statement cancelled after %sms", timeout_ms)
            db.rollback()
            raise QueryTimeoutError() from e
        raise


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
