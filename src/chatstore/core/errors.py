"""
Error hierarchy for chatstore.

Every error raised by the package derives from ChatstoreError and carries an
ErrorCategory so callers can tell retryable storage hiccups from failures
that will not go away on their own.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from pymongo.errors import (
    AutoReconnect,
    ConnectionFailure,
    NetworkTimeout,
    ServerSelectionTimeoutError,
)


class ErrorCategory(str, Enum):
    """Classification of error types for retry decisions."""

    TRANSIENT = "transient"  # Lost connection, election in progress
    PERMANENT = "permanent"  # Bad data, failed command
    UNKNOWN = "unknown"


class ChatstoreError(Exception):
    """Base exception for all chatstore errors."""

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class TransientError(ChatstoreError):
    """Error that may succeed on retry.

    Examples:
    - Server selection timed out
    - Connection reset during a primary election
    """

    category = ErrorCategory.TRANSIENT


class PermanentError(ChatstoreError):
    """Error that will NOT succeed on retry."""

    category = ErrorCategory.PERMANENT


class NotFound(PermanentError):
    """Requested document does not exist."""

    def __init__(self, message: str = "Not found."):
        super().__init__(message)


class DatabaseError(PermanentError):
    """A query against the document store failed.

    Attributes:
        operation: Driver operation that failed (e.g. "find_one").
        with_: Entity the operation was working with (e.g. "user").
    """

    def __init__(self, operation: str, with_: str, cause: Optional[Exception] = None):
        super().__init__(f"Database operation {operation} with {with_} failed.", cause)
        self.operation = operation
        self.with_ = with_


_TRANSIENT_DRIVER_ERRORS = (
    AutoReconnect,
    ConnectionFailure,
    NetworkTimeout,
    ServerSelectionTimeoutError,
)


def is_retryable(error: Exception) -> bool:
    """Check if an error should be retried."""
    if isinstance(error, ChatstoreError):
        return error.category != ErrorCategory.PERMANENT
    return classify_error(error) == ErrorCategory.TRANSIENT


def classify_error(error: Exception) -> ErrorCategory:
    """Classify an exception into a retry category.

    Driver exceptions signalling a lost or unreachable server are transient;
    everything else is permanent.
    """
    if isinstance(error, ChatstoreError):
        return error.category
    if isinstance(error, _TRANSIENT_DRIVER_ERRORS):
        return ErrorCategory.TRANSIENT
    return ErrorCategory.PERMANENT


def wrap_external_error(
    error: Exception,
    context: Optional[str] = None,
) -> Union[TransientError, PermanentError]:
    """Wrap a driver exception in the matching chatstore error type.

    Args:
        error: The external exception.
        context: Optional context for the error message.

    Returns:
        A TransientError or PermanentError wrapping the original.
    """
    message = f"{context}: {error}" if context else str(error)

    if classify_error(error) == ErrorCategory.TRANSIENT:
        return TransientError(message, cause=error)
    return PermanentError(message, cause=error)
