"""
Error taxonomy shared by the services, the repositories and the HTTP layer.

Every failure a service can surface is one of the ``ErrorKind`` members.
Each kind has exactly one exception class and one HTTP status, so clients
can tell a missing row from a duplicate username from a database outage.
"""
from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    HASHING_ERROR = "hashing_error"
    PERSISTENCE_ERROR = "persistence_error"
    VALIDATION_ERROR = "validation_error"


class ForumError(Exception):
    """Base class for every error the services raise."""

    kind: ErrorKind
    status_code: int = 500

    def __init__(self, message: str, detail: dict | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(ForumError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class UniqueViolationError(ForumError):
    kind = ErrorKind.UNIQUE_VIOLATION
    status_code = 409


class HashingError(ForumError):
    """The password hashing or verification primitive failed."""

    kind = ErrorKind.HASHING_ERROR
    status_code = 500


class PersistenceError(ForumError):
    """Any store failure that is not a uniqueness violation."""

    kind = ErrorKind.PERSISTENCE_ERROR
    status_code = 503


class ValidationError(ForumError):
    # Not raised by the services yet; request-shape validation is done by
    # pydantic and reported under the same kind.
    kind = ErrorKind.VALIDATION_ERROR
    status_code = 422
