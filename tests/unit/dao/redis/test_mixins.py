from unittest.mock import MagicMock

import pytest
import redis

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.redis import RedisClientMixin


def test_init_with_client(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    assert mixin.redis is redis_client
    assert mixin.keys.prefix == 'testapp:test'
    redis_client.ping.assert_called_once()


def test_init_creates_client(monkeypatch):
    client = MagicMock(spec=redis.Redis)
    factory = MagicMock(return_value=client)
    monkeypatch.setattr(redis, 'Redis', factory)

    mixin = RedisClientMixin(redis_host='redis.test', redis_port='6380', redis_db='2', redis_password='secret')

    assert mixin.redis is client
    factory.assert_called_once_with(
        host='redis.test',
        port=6380,
        db=2,
        decode_responses=True,
        username=None,
        password='secret',
    )


def test_healthcheck_failure(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    assert mixin._healthcheck(raise_error=False) is False
    with pytest.raises(DataStoreError, match='Check the provided configuration parameters'):
        mixin._healthcheck()
