"""
Shared pytest fixtures for chatstore tests.
"""
import pytest

from chatstore.core.retry import RetryConfig
from tests.fixtures import MockMongoClient


@pytest.fixture
def mongo_client():
    """Empty in-memory MongoDB server."""
    return MockMongoClient()


@pytest.fixture
def fast_retry():
    """Probe retry without waiting between attempts."""
    return RetryConfig(
        max_attempts=3,
        min_wait_seconds=0,
        max_wait_seconds=0,
        exponential_multiplier=1,
        jitter=False,
    )
