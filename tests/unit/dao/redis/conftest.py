from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def pipe():
    """Mock a Redis pipeline usable as a context manager."""
    _pipe = MagicMock(spec=redis.client.Pipeline)
    _pipe.__enter__.return_value = _pipe
    _pipe.__exit__.return_value = None
    _pipe.exists.return_value = 0
    return _pipe


@pytest.fixture
def redis_client(pipe):
    """Mock a Redis client handing out the mocked pipeline."""
    client = MagicMock(
        spec=redis.Redis,
        connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5}),
    )
    client.ping.return_value = True
    client.pipeline.return_value = pipe
    client.exists.return_value = 0
    return client
