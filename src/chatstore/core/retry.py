"""
Retry logic with exponential backoff for transient failures.

Usage:
    from chatstore.core.retry import RetryConfig, retry_with_config

    config = RetryConfig(max_attempts=5, min_wait_seconds=2.0)

    @retry_with_config(config)
    async def list_databases():
        ...
"""

from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Optional, Type, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random_exponential,
)

from chatstore.core.errors import TransientError

log = structlog.get_logger()

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT_SECONDS = 1.0
DEFAULT_MAX_WAIT_SECONDS = 10.0
DEFAULT_EXPONENTIAL_MULTIPLIER = 2.0
DEFAULT_JITTER = True

CONFIG_KEYS = (
    "max_attempts",
    "min_wait_seconds",
    "max_wait_seconds",
    "exponential_multiplier",
    "jitter",
)


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts (including initial).
        min_wait_seconds: Minimum wait time between retries.
        max_wait_seconds: Maximum wait time between retries.
        exponential_multiplier: Multiplier for exponential backoff.
        jitter: Whether to add randomness to wait times.
        retry_on: Exception types to retry on (default: TransientError).
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS
    exponential_multiplier: float = DEFAULT_EXPONENTIAL_MULTIPLIER
    jitter: bool = DEFAULT_JITTER
    retry_on: tuple[Type[Exception], ...] = field(
        default_factory=lambda: (TransientError,)
    )

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RetryConfig":
        """Create RetryConfig from a mapping such as a TOML section.

        Missing keys keep their defaults; values are coerced so that
        integers written for float settings are accepted.
        """
        return cls(
            max_attempts=int(config_dict.get("max_attempts", DEFAULT_MAX_ATTEMPTS)),
            min_wait_seconds=float(
                config_dict.get("min_wait_seconds", DEFAULT_MIN_WAIT_SECONDS)
            ),
            max_wait_seconds=float(
                config_dict.get("max_wait_seconds", DEFAULT_MAX_WAIT_SECONDS)
            ),
            exponential_multiplier=float(
                config_dict.get("exponential_multiplier", DEFAULT_EXPONENTIAL_MULTIPLIER)
            ),
            jitter=bool(config_dict.get("jitter", DEFAULT_JITTER)),
        )


F = TypeVar("F", bound=Callable[..., Any])


def _create_retry_callback(
    log_context: Optional[dict[str, Any]] = None,
) -> Callable[[RetryCallState], None]:
    context = log_context or {}

    def callback(state: RetryCallState) -> None:
        exception = state.outcome.exception() if state.outcome else None
        log.warning(
            "retry_attempt",
            attempt=state.attempt_number,
            error=str(exception) if exception else None,
            error_type=type(exception).__name__ if exception else None,
            wait_seconds=state.next_action.sleep if state.next_action else 0,
            **context,
        )

    return callback


def retry_with_config(
    config: RetryConfig,
    log_context: Optional[dict[str, Any]] = None,
) -> Callable[[F], F]:
    """Decorator to retry a coroutine function using a RetryConfig.

    The last exception is re-raised once attempts are exhausted.

    Args:
        config: Retry configuration.
        log_context: Additional context for log messages.

    Returns:
        Decorator function.
    """

    def decorator(func: F) -> F:
        callback = _create_retry_callback(log_context)

        if config.jitter:
            wait_strategy = wait_random_exponential(
                multiplier=config.exponential_multiplier,
                min=config.min_wait_seconds,
                max=config.max_wait_seconds,
            )
        else:
            wait_strategy = wait_exponential(
                multiplier=config.exponential_multiplier,
                min=config.min_wait_seconds,
                max=config.max_wait_seconds,
            )

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(config.max_attempts),
                wait=wait_strategy,
                retry=retry_if_exception_type(config.retry_on),
                before_sleep=callback,
                reraise=True,
            ):
                with attempt:
                    return await func(*args, **kwargs)

        return async_wrapper  # type: ignore

    return decorator
