"""
Storage failure classification.

Maps a SQLAlchemy ``DBAPIError`` onto one of the application error kinds by
looking at the driver's own classification code:

- Postgres (asyncpg) exposes a five-character SQLSTATE as ``sqlstate`` /
  ``pgcode`` on the wrapped exception.
- SQLite exposes an extended result code as ``sqlite_errorcode``.

Message text is never inspected.  Anything without a recognised code is an
``InternalError``.
"""
import logging
from contextlib import asynccontextmanager
from enum import Enum

from sqlalchemy.exc import DataError, DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.exceptions import (
    ApiError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    INVALID_TEXT_REPRESENTATION = "22P02"
    NUMERIC_VALUE_OUT_OF_RANGE = "22003"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    UNIQUE_VIOLATION = "23505"
    CHECK_VIOLATION = "23514"


# https://www.sqlite.org/rescode.html (extended result codes)
class SQLiteErrorCodes(int, Enum):
    CONSTRAINT_CHECK = 275
    CONSTRAINT_FOREIGNKEY = 787
    CONSTRAINT_NOTNULL = 1299
    CONSTRAINT_PRIMARYKEY = 1555
    CONSTRAINT_UNIQUE = 2067


PGCODE_ERROR_MAP: dict[str, type[ApiError]] = {
    PostgresErrorCodes.INVALID_TEXT_REPRESENTATION: ValidationError,
    PostgresErrorCodes.NUMERIC_VALUE_OUT_OF_RANGE: ValidationError,
    PostgresErrorCodes.NOT_NULL_VIOLATION: ValidationError,
    PostgresErrorCodes.CHECK_VIOLATION: ValidationError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: NotFoundError,
    PostgresErrorCodes.UNIQUE_VIOLATION: ConflictError,
}

SQLITE_ERROR_MAP: dict[int, type[ApiError]] = {
    SQLiteErrorCodes.CONSTRAINT_CHECK: ValidationError,
    SQLiteErrorCodes.CONSTRAINT_NOTNULL: ValidationError,
    SQLiteErrorCodes.CONSTRAINT_FOREIGNKEY: NotFoundError,
    SQLiteErrorCodes.CONSTRAINT_PRIMARYKEY: ConflictError,
    SQLiteErrorCodes.CONSTRAINT_UNIQUE: ConflictError,
}


def _error_class_for(orig) -> type[ApiError] | None:
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return PGCODE_ERROR_MAP.get(sqlstate)

    sqlite_code = getattr(orig, "sqlite_errorcode", None)
    if sqlite_code is not None:
        return SQLITE_ERROR_MAP.get(sqlite_code)

    return None


def classify_db_error(exc: DBAPIError) -> ApiError:
    """
    Return the application error that *exc* maps to.

    The returned instance carries the default client-safe message for its
    kind; the raw driver message only ever goes to the DEBUG log.
    """
    error_class = _error_class_for(exc.orig)

    # Driver-side data errors (e.g. an int that does not fit the column)
    # carry no SQLSTATE but are still malformed input.
    if error_class is None and isinstance(exc, DataError):
        error_class = ValidationError

    if error_class is None:
        logger.error("Unclassified storage failure: %s", type(exc.orig).__name__)
        logger.debug("Unclassified storage failure (raw): %r", exc.orig)
        return InternalError()

    logger.info("Storage failure classified as %s", error_class.__name__)
    return error_class()


@asynccontextmanager
async def db_error_handler(db: AsyncSession):
    """
    Roll back and re-raise storage failures as application errors.

    Usage::

        async with db_error_handler(db):
            await db.execute(insert(Comment).values(...))
    """
    try:
        yield
    except DBAPIError as exc:
        await db.rollback()
        raise classify_db_error(exc) from exc
