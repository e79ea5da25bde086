"""Data Access Object (DAO) implementation for managing mappings in Redis

This module provides a Redis-based implementation of MappingBaseDAO for
key-value operations on MappingModel records and per-owner code indexes.

Key layout (see RedisKeySchema):
    <prefix>:mapping:<short code>      -> JSON record string, with TTL
    <prefix>:owner:<owner id>:codes    -> Redis set of short codes

Responsibilities:
    - Insert, overwrite, retrieve and delete mapping records;
    - Keep per-record TTLs in Redis as an eviction backstop;
    - Maintain the per-owner index sets;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    MappingRedisDAO:
        DAO for storing and retrieving MappingModel in a Redis datastore.

Example:
    >>> from ephemurl.dao.redis import MappingRedisDAO

    >>> dao = MappingRedisDAO(prefix="ephemurl:dev")
    >>> dao.insert(mapping, ttl=172800)
    <MappingRedisDAO>

    >>> dao.exists('aB3x9')
    True
    >>> dao.get('aB3x9').long_url
    'https://example.com/a'
    >>> dao.index_members('owner1')
    {'aB3x9'}
"""

import json

from beartype import beartype

from ephemurl.models import MappingModel
from ephemurl.dao.base import MappingBaseDAO
from ephemurl.dao.redis.mixins import RedisClientMixin
from ephemurl.dao.redis.helpers import handle_redis_connection_error
from ephemurl.dao.exceptions import MalformedRecordError


def _require_positive_ttl(ttl: int) -> None:
    if ttl < 1:
        raise ValueError(f'TTL must be at least 1 second (given value: {ttl}).')


class MappingRedisDAO(RedisClientMixin, MappingBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short code mappings

    This class implements the MappingBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        exists, get, set_with_ttl, insert, delete:
            Record operations keyed by short code.
        index_add, index_remove, index_members:
            Owner index operations keyed by owner id.

    Every method raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def exists(self, short_code: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.mapping_key(short_code)))

    @handle_redis_connection_error
    @beartype
    def get(self, short_code: str, **kwargs) -> MappingModel | None:
        """Retrieve a stored mapping by short code

        Args:
            short_code (str):
                The short code identifier of the mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            MappingModel | None:
                The decoded mapping, or None if no record is stored.

        Raises:
            MalformedRecordError:
                If the stored value is not a valid JSON mapping record.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('aB3x9')
            MappingModel(short_code='aB3x9', long_url='https://example.com/a', ...)
        """
        raw = self.redis.get(self.keys.mapping_key(short_code))
        if raw is None:
            return None

        try:
            return MappingModel.from_record(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedRecordError(f"Mapping record for code '{short_code}' is malformed.") from e

    @handle_redis_connection_error
    @beartype
    def set_with_ttl(self, mapping: MappingModel, ttl: int, **kwargs) -> 'MappingRedisDAO':
        """Write (or overwrite) a mapping record with a fresh TTL

        Args:
            mapping (MappingModel):
                The mapping to persist.
            ttl (int):
                Seconds until Redis evicts the record. Must be >= 1.

        Returns:
            MappingRedisDAO: self (for method chaining)

        Example:
            >>> dao.set_with_ttl(renewed_mapping, ttl=345600)
            <MappingRedisDAO>
        """
        _require_positive_ttl(ttl)
        self.redis.set(self.keys.mapping_key(mapping.short_code), json.dumps(mapping.to_record()), ex=ttl)
        return self

    @handle_redis_connection_error
    @beartype
    def insert(self, mapping: MappingModel, ttl: int, **kwargs) -> 'MappingRedisDAO':
        """Insert a new mapping record and index it under its owner

        The insertion is performed via a Redis transaction so a record is
        never left without its owner index entry (or vice versa).

        Args:
            mapping (MappingModel):
                The mapping to persist.
            ttl (int):
                Seconds until Redis evicts the record. Must be >= 1.

        Returns:
            MappingRedisDAO: self (for method chaining)

        Raises:
            ValueError:
                If ttl is below one second.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        _require_positive_ttl(ttl)

        # NOTE: The index set has no TTL of its own. It outlives evicted records
        #       and is pruned lazily by MappingService when stale codes are read.
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self.keys.mapping_key(mapping.short_code), json.dumps(mapping.to_record()), ex=ttl)
            pipe.sadd(self.keys.owner_index_key(mapping.owner_id), mapping.short_code)
            pipe.execute()
        return self

    @handle_redis_connection_error
    @beartype
    def delete(self, short_code: str, **kwargs) -> bool:
        return self.redis.delete(self.keys.mapping_key(short_code)) > 0

    @handle_redis_connection_error
    @beartype
    def index_add(self, owner_id: str, short_code: str, **kwargs) -> 'MappingRedisDAO':
        self.redis.sadd(self.keys.owner_index_key(owner_id), short_code)
        return self

    @handle_redis_connection_error
    @beartype
    def index_remove(self, owner_id: str, short_code: str, **kwargs) -> 'MappingRedisDAO':
        self.redis.srem(self.keys.owner_index_key(owner_id), short_code)
        return self

    @handle_redis_connection_error
    @beartype
    def index_members(self, owner_id: str, **kwargs) -> set[str]:
        return set(self.redis.smembers(self.keys.owner_index_key(owner_id)))
