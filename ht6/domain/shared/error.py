"""Error taxonomy for the HT6 API.

Error layers:
- ApiError: Base class for every failure that reaches the wire. Carries an HTTP
  status and one or more ErrorDetail entries.
- GenericError: Unclassified failure wrapped as a 500.
- DatabaseError: Storage failure. Keeps its diagnostics for the operational log
  but always renders as a single generic detail, for every caller.

Each ApiError has two renderings. ``to_dict()`` is the redacted form (code and
message only) and ``to_admin_dict()`` is the full form. Choosing between them
is the job of the error responder in the API layer.
"""

from collections.abc import Sequence
from email.utils import formatdate
from typing import Any, Literal

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """A single structured error entry.

    ``message`` is always safe to show. ``detail`` and ``suggestion`` may carry
    internal information and are only rendered for admins.
    """

    code: str  # e.g. "FORBIDDEN", "UNIQUE_VIOLATION"
    message: str
    detail: str | None = None
    suggestion: str | None = None

    def redacted(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}

    def full(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class ErrorResponse(BaseModel):
    """Wire envelope for every error response.

    The key is ``error`` (singular) even though it holds a list.
    """

    success: Literal[False] = False
    error: list[ErrorDetail]
    timestamp: str


def utc_timestamp() -> str:
    """Current time as an RFC 7231 UTC string, e.g. ``Mon, 19 Oct 2026 12:00:00 GMT``."""
    return formatdate(usegmt=True)


class ApiError(Exception):
    """Base class for all errors rendered to API callers."""

    def __init__(
        self,
        status_code: int,
        errors: ErrorDetail | Sequence[ErrorDetail],
    ) -> None:
        self.status_code = status_code
        self.errors: list[ErrorDetail] = (
            [errors] if isinstance(errors, ErrorDetail) else list(errors)
        )
        self.timestamp = utc_timestamp()
        super().__init__(self.errors[0].message if self.errors else "")

    @property
    def code(self) -> str:
        """Code of the first detail."""
        return self.errors[0].code if self.errors else self.__class__.__name__

    def _envelope(self, errors: list[dict[str, str]]) -> dict[str, Any]:
        return {"success": False, "error": errors, "timestamp": self.timestamp}

    def to_dict(self) -> dict[str, Any]:
        """Redacted rendering: code and message only."""
        return self._envelope([e.redacted() for e in self.errors])

    def to_admin_dict(self) -> dict[str, Any]:
        """Full rendering including detail and suggestion."""
        return self._envelope([e.full() for e in self.errors])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status_code={self.status_code}, errors={self.errors!r})"


class GenericError(ApiError):
    """Unclassified failure. Always a 500."""

    def __init__(
        self,
        detail: str | None = None,
        *,
        message: str = "An unexpected error occurred.",
        suggestion: str | None = "Please try again later.",
    ) -> None:
        super().__init__(
            500,
            ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


DATABASE_ERROR_DETAIL = ErrorDetail(
    code="DATABASE_ERROR",
    message="A database error occurred. Contact support if the issue persists.",
)


class DatabaseError(ApiError):
    """Storage failure whose internals never reach the wire, not even for admins."""

    def to_dict(self) -> dict[str, Any]:
        return self._envelope([DATABASE_ERROR_DETAIL.redacted()])

    def to_admin_dict(self) -> dict[str, Any]:
        return self._envelope([DATABASE_ERROR_DETAIL.redacted()])
