import functools
from contextlib import contextmanager
from collections.abc import Callable, Iterator

import redis

from urlshortener.dao.exceptions import DataStoreError


__all__ = ['connection_info', 'redis_connection_guard', 'handle_redis_connection_error']


def connection_info(client: redis.Redis) -> str:
    """Describe where `client` points to as '<host>:<port>/<db>'."""
    kwargs = client.connection_pool.connection_kwargs
    return '{}:{}/{}'.format(kwargs.get('host'), kwargs.get('port'), kwargs.get('db'))


@contextmanager
def redis_connection_guard(client: redis.Redis, hint: str = '') -> Iterator[None]:
    """Re-raise Redis connection failures inside the block as DataStoreError.

    Example:
        >>> with redis_connection_guard(dao.redis):
        ...     dao.redis.ping()
    """
    try:
        yield
    except redis.exceptions.ConnectionError as e:
        message = f"Can't connect to Redis at {connection_info(client)}."
        raise DataStoreError(f'{message} {hint}' if hint else message) from e


def handle_redis_connection_error[F: Callable](method: F) -> F:
    """Decorator for DAO methods: Redis connection failures surface as DataStoreError.

    The decorated method's instance must expose its client as `self.redis`.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with redis_connection_guard(self.redis):
            return method(self, *args, **kwargs)

    return wrapper
