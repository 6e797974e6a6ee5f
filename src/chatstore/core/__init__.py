"""Core infrastructure - config, errors, logging, retry, storage protocols."""

from chatstore.core.config import ConfigManager, DatabaseSettings
from chatstore.core.errors import (
    ChatstoreError,
    DatabaseError,
    ErrorCategory,
    NotFound,
    PermanentError,
    TransientError,
    classify_error,
    is_retryable,
    wrap_external_error,
)
from chatstore.core.logging import configure_logging, setup_logging
from chatstore.core.retry import RetryConfig, retry_with_config
from chatstore.core.storage import StorageClient, StorageDatabase

__all__ = [
    # Config
    "ConfigManager",
    "DatabaseSettings",
    # Errors
    "ChatstoreError",
    "DatabaseError",
    "ErrorCategory",
    "NotFound",
    "PermanentError",
    "TransientError",
    "classify_error",
    "is_retryable",
    "wrap_external_error",
    # Logging
    "configure_logging",
    "setup_logging",
    # Retry
    "RetryConfig",
    "retry_with_config",
    # Storage
    "StorageClient",
    "StorageDatabase",
]
