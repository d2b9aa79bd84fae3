# This project was developed with assistance from AI tools.
"""Service-layer error taxonomy.

Services raise these instead of ``HTTPException`` so the same code paths can
be driven from routes, scripts, and tests. ``main.py`` maps each kind to an
HTTP status and an RFC 7807 body.
"""

import enum

from sqlalchemy.exc import DBAPIError


class ErrorKind(str, enum.Enum):
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    CONFLICT = "conflict"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    UNEXPECTED = "unexpected"


class RecoveryError(Exception):
    """Base class for errors surfaced to API callers."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    status_code: int = 500
    retryable: bool = False
    default_message: str = "Server error while saving response"

    def __init__(self, message: str | None = None, *, errors: list[str] | None = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationFailed(RecoveryError):
    kind = ErrorKind.VALIDATION_FAILED
    status_code = 400
    default_message = "Validation failed"


class NotFound(RecoveryError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    default_message = "Not found"


class Timeout(RecoveryError):
    kind = ErrorKind.TIMEOUT
    status_code = 408
    retryable = True
    default_message = "Request timeout - please try again"


class Conflict(RecoveryError):
    kind = ErrorKind.CONFLICT
    status_code = 409
    retryable = True
    default_message = "Database conflict - please try again"


class StorageUnavailable(RecoveryError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
    status_code = 503
    retryable = True
    default_message = "Database connection lost - please try again"


class Unexpected(RecoveryError):
    kind = ErrorKind.UNEXPECTED


# PostgreSQL SQLSTATE codes
_CONFLICT_STATES = frozenset({"40P01", "40001"})  # deadlock, serialization failure
_TIMEOUT_STATES = frozenset({"55P03", "57014"})  # lock_not_available, query_canceled
# unique, foreign key, check; a retry hits the same violation
_CONSTRAINT_STATES = frozenset({"23505", "23503", "23514"})


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def classify_db_error(exc: DBAPIError) -> RecoveryError:
    """Map a driver error onto the taxonomy by SQLSTATE."""
    state = _sqlstate(exc)
    if exc.connection_invalidated or (state and state.startswith("08")):
        return StorageUnavailable()
    if state in _CONFLICT_STATES:
        return Conflict()
    if state in _TIMEOUT_STATES:
        return Timeout()
    if state in _CONSTRAINT_STATES:
        return Unexpected("Response conflicts with a stored record for this loan")
    return Unexpected()
