from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix():
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def pipeline():
    """Mock a transactional Redis pipeline usable as a context manager."""
    _pipeline = MagicMock(spec=redis.client.Pipeline)
    _pipeline.__enter__.return_value = _pipeline
    _pipeline.__exit__.return_value = None
    return _pipeline


@pytest.fixture
def redis_client(pipeline):
    """Mock a Redis client with a known connection pool."""
    _redis_client = MagicMock(spec=redis.Redis)
    _redis_client.pipeline.return_value = pipeline
    _redis_client.connection_pool = MagicMock()
    _redis_client.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}
    return _redis_client
