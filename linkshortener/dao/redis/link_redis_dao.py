"""Data Access Object (DAO) implementation for managing link mappings in Redis

Responsibilities:
    - Insert and retrieve key to target mappings;
    - Increment the global counter atomically (INCR), so that concurrent
      generators can reserve distinct counter values;
    - Raise appropriate DAO exceptions.

Example:
    >>> from linkshortener.models import LinkRecord
    >>> from linkshortener.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix='linkshortener:dev')
    >>> dao.insert(LinkRecord(key='vq5ejng0p6', target='https://example.com/page'))
    <LinkRedisDAO>
    >>> dao.get('vq5ejng0p6').target
    'https://example.com/page'
"""

from datetime import datetime, timedelta, UTC

from beartype import beartype

from linkshortener.models import LinkRecord
from linkshortener.constants import TTL
from linkshortener.dao.base import LinkBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import LinkAlreadyExistsError, LinkNotFoundError


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing link mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'

    @handle_redis_connection_error
    @beartype
    def insert(self, record: LinkRecord, **kwargs) -> 'LinkRedisDAO':
        """Insert a key to target mapping into Redis

        SET NX both checks for an existing key and writes the mapping in a
        single round trip. Mappings expire after one year.

        Raises:
            LinkAlreadyExistsError:
                If a mapping with the same key already exists.
            DataStoreError:
                If a Redis connection issue occurs.
        """
        created = self.redis.set(self.keys.link_target_key(record.key), record.target, nx=True, ex=TTL.ONE_YEAR)
        if not created:
            raise LinkAlreadyExistsError(f"Link with key '{record.key}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, key: str, **kwargs) -> LinkRecord:
        """Retrieve a stored mapping by key

        Fetches the target and its remaining TTL in one transaction and
        converts the TTL into an absolute expiry datetime.

        Raises:
            LinkNotFoundError:
                If the key does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        link_target_key = self.keys.link_target_key(key)
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_target_key)
            pipe.ttl(link_target_key)
            target, ttl = pipe.execute()

        if target is None:
            raise LinkNotFoundError(f"Link with key '{key}' not found.")

        # TTL is -1 for keys without expiry
        expires_at = datetime.now(UTC) + timedelta(seconds=ttl) if ttl is not None and ttl >= 0 else None
        return LinkRecord(key=key, target=target, expires_at=expires_at)

    @handle_redis_connection_error
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve (and optionally increment) the global link counter

        Example:
            >>> dao.count(increment=False)
            123
            >>> dao.count(increment=True)
            124
        """
        if increment:
            return int(self.redis.incr(self.keys.counter_key()))
        value = self.redis.get(self.keys.counter_key())
        return 0 if value is None else int(value)
