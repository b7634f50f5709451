"""Unit tests for Redis DAO helpers."""

import pytest
import redis

from urlshortener.dao.exceptions import DataStoreError
from urlshortener.dao.redis.helpers import connection_info, handle_redis_connection_error, redis_connection_guard


class _FakeDAO:
    def __init__(self, client):
        self.redis = client

    @handle_redis_connection_error
    def get_count(self):
        return self.redis.get('count')


def test_connection_info(redis_client):
    assert connection_info(redis_client) == 'redis.test:6379/0'


def test_handle_redis_connection_error_passes_through_results(redis_client):
    redis_client.get.return_value = '7'
    assert _FakeDAO(redis_client).get_count() == '7'


def test_handle_redis_connection_error_translates_connection_errors(redis_client):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection refused')
    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0.") as exc_info:
        _FakeDAO(redis_client).get_count()
    assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)


def test_handle_redis_connection_error_keeps_other_errors(redis_client):
    redis_client.get.side_effect = redis.exceptions.ResponseError('WRONGTYPE')
    with pytest.raises(redis.exceptions.ResponseError):
        _FakeDAO(redis_client).get_count()


def test_handle_redis_connection_error_preserves_metadata():
    assert _FakeDAO.get_count.__name__ == 'get_count'


def test_redis_connection_guard_appends_hint(redis_client):
    with pytest.raises(DataStoreError, match=r"at redis.test:6379/0\. Check the provided configuration parameters\.$"):
        with redis_connection_guard(redis_client, hint='Check the provided configuration parameters.'):
            raise redis.exceptions.ConnectionError('Connection refused')
