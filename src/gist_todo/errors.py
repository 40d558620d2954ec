# src/gist_todo/errors.py

"""
Error taxonomy shared by the task store, the remote client and the sync engine.

Every failure the app reports belongs to exactly one ErrorKind. Exceptions carry
their kind so callers can branch on it instead of on exception class names.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    AUTH_REQUIRED = "AuthRequired"
    INVALID_ARGUMENT = "InvalidArgument"
    NOT_FOUND = "NotFound"
    AMBIGUOUS = "Ambiguous"
    NETWORK_ERROR = "NetworkError"
    SERVER_ERROR = "ServerError"
    DECODE_ERROR = "DecodeError"


class TodoError(Exception):
    """Base error. `kind` is fixed per subclass unless passed explicitly."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(TodoError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class TaskNotFoundError(TodoError, LookupError):
    kind = ErrorKind.NOT_FOUND


class AmbiguousPrefixError(TodoError, LookupError):
    kind = ErrorKind.AMBIGUOUS


class RemoteError(TodoError):
    """Failure talking to the remote document (gist)."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message, kind=kind)


def describe_error_kind(kind: ErrorKind) -> str:
    """Short user-facing hint for an error kind."""
    match kind:
        case ErrorKind.AUTH_REQUIRED:
            return "Authentication required. Run 'gist-todo auth setup' first."
        case ErrorKind.INVALID_ARGUMENT:
            return "Invalid input."
        case ErrorKind.NOT_FOUND:
            return "Nothing matched."
        case ErrorKind.AMBIGUOUS:
            return "More than one task matched. Use more characters of the id."
        case ErrorKind.NETWORK_ERROR:
            return "Network problem. Check your connection and try again."
        case ErrorKind.SERVER_ERROR:
            return "GitHub returned an error. Try again later."
        case ErrorKind.DECODE_ERROR:
            return "The remote task list could not be read."
