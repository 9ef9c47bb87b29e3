"""Translate database failures into ApiErrors.

SQLAlchemy wraps driver exceptions in ``DBAPIError`` and keeps the driver's own
exception on ``.orig``. PostgreSQL reports failures with a five-character
SQLSTATE, see https://www.postgresql.org/docs/current/errcodes-appendix.html.
The attribute carrying it differs per driver:

- asyncpg (through SQLAlchemy's adapter) and psycopg 3: ``sqlstate``
- psycopg2: ``pgcode``

Constraint and column names are on the asyncpg exception itself
(``constraint_name``/``column_name``) or on ``diag`` for psycopg.

Every SQLSTATE in POSTGRES_TRANSLATIONS has a fixed message and renders as a
plain ApiError, so admins also get its detail. Failures whose message would
carry raw driver text become DatabaseErrors and never reach the wire.
"""

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from ht6.domain.shared.error import ApiError, DatabaseError, ErrorDetail, GenericError


@dataclass(frozen=True)
class _Translation:
    status_code: int
    code: str
    message: str
    suggestion: str | None = None
    detail: Callable[[BaseException], str | None] = lambda _: None


def _constraint_detail(orig: BaseException) -> str | None:
    name = _diagnostic(orig, "constraint_name")
    return f"Constraint: {name}" if name else None


def _column_detail(orig: BaseException) -> str | None:
    name = _diagnostic(orig, "column_name")
    return f"Column: {name}" if name else None


_SERVER_SIDE = "This is a server-side issue. Contact support if it persists."

POSTGRES_TRANSLATIONS: dict[str, _Translation] = {
    "23505": _Translation(
        409,
        "UNIQUE_VIOLATION",
        "A duplicate entry was found for a unique field.",
        "Ensure the value is unique or update the existing record.",
        _constraint_detail,
    ),
    "23503": _Translation(
        409,
        "FOREIGN_KEY_VIOLATION",
        "A foreign key violation occurred. The record you are trying to link does not exist.",
        "Ensure the referenced record exists before linking to it.",
        _constraint_detail,
    ),
    "22P02": _Translation(
        400,
        "INVALID_TEXT_REPRESENTATION",
        "The data provided is in an invalid format (e.g., not a valid UUID).",
        "Check the format of the submitted values.",
    ),
    "23514": _Translation(
        409,
        "CHECK_VIOLATION",
        "A check constraint was violated.",
        "Ensure the submitted values satisfy the field constraints.",
        _constraint_detail,
    ),
    "23502": _Translation(
        400,
        "NOT_NULL_VIOLATION",
        "A required field is missing.",
        "Provide a value for every required field.",
        _column_detail,
    ),
    "42703": _Translation(
        500,
        "UNDEFINED_COLUMN",
        "An undefined column was referenced in the query.",
        _SERVER_SIDE,
        _column_detail,
    ),
    "42601": _Translation(
        500,
        "SYNTAX_ERROR",
        "There's a syntax error in the database query.",
        _SERVER_SIDE,
    ),
    "42P01": _Translation(
        500,
        "UNDEFINED_TABLE",
        "A referenced table does not exist in the database.",
        _SERVER_SIDE,
    ),
}


def _candidates(orig: BaseException) -> list[BaseException]:
    # The SQLAlchemy asyncpg adapter chains the raw asyncpg exception as __cause__.
    chained = orig.__cause__
    return [orig, chained] if chained is not None else [orig]


def _diagnostic(orig: BaseException, attr: str) -> str | None:
    for candidate in _candidates(orig):
        value = getattr(candidate, attr, None)
        if isinstance(value, str) and value:
            return value
        value = getattr(getattr(candidate, "diag", None), attr, None)
        if isinstance(value, str) and value:
            return value
    return None


def get_sqlstate(orig: BaseException) -> str | None:
    """Return the PostgreSQL SQLSTATE carried by a driver exception, if any."""
    for candidate in _candidates(orig):
        for attr in ("sqlstate", "pgcode"):
            value = getattr(candidate, attr, None)
            if isinstance(value, str) and value:
                return value
    return None


def _translate_driver_error(orig: BaseException) -> ApiError:
    sqlstate = get_sqlstate(orig)
    driver_message = str(orig) or orig.__class__.__name__

    if sqlstate is None:
        return DatabaseError(
            500,
            ErrorDetail(
                code="DATABASE_DRIVER_ERROR",
                message=f"A database error occurred: {driver_message}",
                detail=orig.__class__.__name__,
            ),
        )

    translation = POSTGRES_TRANSLATIONS.get(sqlstate)
    if translation is None:
        return DatabaseError(
            500,
            ErrorDetail(
                code=sqlstate,
                message=f"A database error occurred: {driver_message}",
                detail=driver_message,
            ),
        )

    return ApiError(
        translation.status_code,
        ErrorDetail(
            code=translation.code,
            message=translation.message,
            detail=translation.detail(orig),
            suggestion=translation.suggestion,
        ),
    )


def translate_db_error(error: object) -> ApiError:
    """Map any failure to an ApiError. Never raises.

    - ApiError: returned unchanged.
    - DBAPIError: classified by SQLSTATE (see POSTGRES_TRANSLATIONS).
    - Other SQLAlchemyError: 500 ``ORM_ERROR``.
    - Other exceptions: passed through as a 500 GenericError.
    - Anything else: 500 ``UNKNOWN_DATABASE_ERROR``.
    """
    try:
        if isinstance(error, ApiError):
            return error
        if isinstance(error, DBAPIError):
            orig = error.orig
            if isinstance(orig, BaseException):
                return _translate_driver_error(orig)
            return DatabaseError(
                500,
                ErrorDetail(
                    code="DATABASE_DRIVER_ERROR",
                    message=f"A database error occurred: {error}",
                ),
            )
        if isinstance(error, SQLAlchemyError):
            return DatabaseError(
                500,
                ErrorDetail(
                    code="ORM_ERROR",
                    message=str(error) or "An unexpected error occurred.",
                    detail=error.__class__.__name__,
                ),
            )
        if isinstance(error, BaseException):
            return GenericError(detail=str(error) or error.__class__.__name__)
    except Exception as exc:  # noqa: BLE001
        return DatabaseError(
            500,
            ErrorDetail(
                code="UNKNOWN_DATABASE_ERROR",
                message="An unknown error occurred.",
                detail=f"Error translation failed: {exc!r}",
            ),
        )

    return DatabaseError(
        500,
        ErrorDetail(code="UNKNOWN_DATABASE_ERROR", message="An unknown error occurred."),
    )
