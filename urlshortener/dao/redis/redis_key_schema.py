"""Redis key layout for short link records.

    [<prefix>:]links:<shortcode>    hash {target, created_at}
    [<prefix>:]links:counter        integer, last issued counter value
"""

import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']

LINKS_NAMESPACE = 'links'


def namespaced(build_key: Callable[..., str]) -> Callable[..., str]:
    """Join the schema prefix, the links namespace and the key built by `build_key`."""

    @functools.wraps(build_key)
    def wrapper(schema: 'RedisKeySchema', *args) -> str:
        parts = (schema.prefix, LINKS_NAMESPACE, build_key(schema, *args))
        return ':'.join(part for part in parts if part is not None)

    return wrapper


class RedisKeySchema:
    """Build the Redis keys used by ShortLinkRedisDAO.

    Set a prefix per app and environment (e.g. "urlshortener:prod") so that
    several deployments can share one Redis database.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')
        self.prefix = prefix

    def __repr__(self) -> str:
        return f'RedisKeySchema(prefix={self.prefix!r})'

    @namespaced
    def link_key(self, shortcode: str) -> str:
        return shortcode

    @namespaced
    def counter_key(self) -> str:
        return 'counter'
