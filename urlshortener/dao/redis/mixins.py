"""Shared Redis client setup for Redis-backed DAOs.

Example:
    >>> class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    ...     pass
    ...
    >>> dao = ShortLinkRedisDAO(redis_host='localhost', prefix='urlshortener:dev')
    >>> dao._healthcheck()
    True
"""

import redis

from urlshortener.dao.redis.redis_key_schema import RedisKeySchema
from urlshortener.dao.redis.helpers import redis_connection_guard
from urlshortener.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Give a DAO a Redis client (`self.redis`) and a key schema (`self.keys`).

    Keyword arguments mirror the `redis` section of the lambda configuration
    with a `redis_` prefix, so a DAO can be built straight from it:

        >>> ShortLinkRedisDAO(**{f'redis_{k}': v for k, v in config['redis'].items()})

    Construction pings Redis and raises DataStoreError if it can't be reached.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        if redis_client is None:
            redis_client = self._connect(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )
        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    @staticmethod
    def _connect(*, host: str, port: int | str, db: int | str, **options) -> redis.Redis:
        # YAML and AppConfig documents may carry port/db as strings
        return redis.Redis(host=host, port=int(port), db=int(db), **options)

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; return False instead of raising when `raise_error` is off."""
        try:
            with redis_connection_guard(self.redis, hint='Check the provided configuration parameters.'):
                self.redis.ping()
        except DataStoreError:
            if raise_error:
                raise
            return False
        return True
