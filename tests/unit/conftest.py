from datetime import datetime, UTC

import pytest

from ephemurl.models import MappingModel
from ephemurl.dao.base import MappingBaseDAO
from ephemurl.dao.exceptions import MalformedRecordError
from ephemurl.services import MappingService


class InMemoryMappingDAO(MappingBaseDAO):
    """Dict-backed MappingBaseDAO used to exercise MappingService without Redis.

    TTLs are recorded but never enforced, matching a store whose eviction has
    not kicked in yet. Use evict() to simulate the store dropping a record and
    corrupt() to make a stored record undecodable.
    """

    def __init__(self):
        self.records: dict[str, MappingModel] = {}
        self.ttls: dict[str, int] = {}
        self.indexes: dict[str, set[str]] = {}
        self.calls: list[str] = []
        self.corrupted: set[str] = set()

    def exists(self, short_code, **kwargs):
        self.calls.append('exists')
        return short_code in self.records

    def get(self, short_code, **kwargs):
        self.calls.append('get')
        if short_code in self.corrupted:
            raise MalformedRecordError(f"Mapping record for code '{short_code}' is malformed.")
        return self.records.get(short_code)

    def set_with_ttl(self, mapping, ttl, **kwargs):
        self.calls.append('set_with_ttl')
        self.records[mapping.short_code] = mapping
        self.ttls[mapping.short_code] = ttl
        return self

    def insert(self, mapping, ttl, **kwargs):
        self.calls.append('insert')
        self.records[mapping.short_code] = mapping
        self.ttls[mapping.short_code] = ttl
        self.indexes.setdefault(mapping.owner_id, set()).add(mapping.short_code)
        return self

    def delete(self, short_code, **kwargs):
        self.calls.append('delete')
        self.ttls.pop(short_code, None)
        return self.records.pop(short_code, None) is not None

    def index_add(self, owner_id, short_code, **kwargs):
        self.calls.append('index_add')
        self.indexes.setdefault(owner_id, set()).add(short_code)
        return self

    def index_remove(self, owner_id, short_code, **kwargs):
        self.calls.append('index_remove')
        self.indexes.get(owner_id, set()).discard(short_code)
        return self

    def index_members(self, owner_id, **kwargs):
        self.calls.append('index_members')
        return set(self.indexes.get(owner_id, set()))

    def evict(self, short_code):
        """Drop a record the way a Redis TTL would: the index entry stays behind."""
        self.records.pop(short_code, None)
        self.ttls.pop(short_code, None)

    def corrupt(self, short_code):
        """Make get() fail to decode the record, as with a hand-edited Redis value."""
        self.corrupted.add(short_code)


class SequenceGenerator:
    """Deterministic code generator yielding a fixed sequence of candidates."""

    def __init__(self, *codes: str):
        self.codes = list(codes)
        self.calls = 0

    def __call__(self, length: int) -> str:
        self.calls += 1
        return self.codes.pop(0)


@pytest.fixture
def dao() -> InMemoryMappingDAO:
    return InMemoryMappingDAO()


@pytest.fixture
def service(dao) -> MappingService:
    return MappingService(dao)


@pytest.fixture
def make_mapping():
    """Build MappingModel instances with sensible defaults."""

    def _make_mapping(short_code='aB3x9', owner_id='owner1', created_at=None, expires_at=None, long_url='https://example.com/a'):
        created_at = created_at or datetime(2026, 1, 1, 0, 0, 0, tzinfo=UTC)
        expires_at = expires_at or datetime(2026, 1, 3, 0, 0, 0, tzinfo=UTC)
        return MappingModel(
            short_code=short_code,
            long_url=long_url,
            created_at=created_at,
            expires_at=expires_at,
            owner_id=owner_id,
        )

    return _make_mapping


@pytest.fixture
def sequence_generator():
    """Provide the SequenceGenerator class for tests that control candidate codes."""
    return SequenceGenerator
