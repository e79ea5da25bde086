from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest
import redis

from ephemurl.models import MappingModel


@pytest.fixture
def app_prefix() -> str:
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5},
    )
    client.exists.return_value = 0
    client.get.return_value = None
    client.delete.return_value = 0
    client.smembers.return_value = set()
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client


@pytest.fixture
def mapping() -> MappingModel:
    return MappingModel(
        short_code='aB3x9',
        long_url='https://example.com/a',
        created_at=datetime(2026, 1, 1, 0, 0, 0, tzinfo=UTC),
        expires_at=datetime(2026, 1, 3, 0, 0, 0, tzinfo=UTC),
        owner_id='owner1',
    )


@pytest.fixture
def record_json() -> str:
    # fmt: off
    return (
        '{"shortUrl": "aB3x9", '
        '"longUrl": "https://example.com/a", '
        '"createdAt": "2026-01-01T00:00:00.000Z", '
        '"expiresAt": "2026-01-03T00:00:00.000Z", '
        '"ownerId": "owner1"}'
    )
    # fmt: on
