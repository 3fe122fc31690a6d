from psycopg2 import errors as pg_errors
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import sessionmaker

from .config import (
    DATABASE_URL,
    DB_CONNECT_TIMEOUT_SECONDS,
    DB_POOL_TIMEOUT_SECONDS,
    DB_STATEMENT_TIMEOUT_MS,
)
from .errors import DatastoreError, DatastoreTimeout

# Every statement is bounded server-side; a hung query becomes QueryCanceled
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    pool_timeout=DB_POOL_TIMEOUT_SECONDS,
    connect_args={
        "connect_timeout": DB_CONNECT_TIMEOUT_SECONDS,
        "options": f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}",
    },
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def fetch_all(db, stmt, message: str) -> list:
    """Run a read and return scalar rows, translating driver failures.

    ``message`` is what the client sees if the datastore fails; the
    underlying error stays chained for the server log.
    """
    try:
        return list(db.execute(stmt).scalars().all())
    except PoolTimeoutError as exc:
        raise DatastoreTimeout() from exc
    except OperationalError as exc:
        if isinstance(exc.orig, pg_errors.QueryCanceled):
            raise DatastoreTimeout() from exc
        raise DatastoreError(message) from exc
    except SQLAlchemyError as exc:
        raise DatastoreError(message) from exc
