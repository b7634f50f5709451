"""Redis implementation of ShortLinkBaseDAO.

Each short link is a single Redis hash that expires together with the link:

    <prefix>:links:<shortcode>  ->  {"target": <original url>, "created_at": <ISO-8601 UTC>}

and shortcodes are drawn from the integer counter at `<prefix>:links:counter`.

Example:
    >>> dao = ShortLinkRedisDAO(redis_host="localhost", prefix="urlshortener:dev")
    >>> dao.insert(ShortLinkModel(target="https://example.com/page", shortcode="abc123")).get("abc123").target
    'https://example.com/page'
"""

from datetime import datetime, timedelta, UTC

from beartype import beartype

from urlshortener.models import ShortLinkModel
from urlshortener.constants import TTL
from urlshortener.dao.base import ShortLinkBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_connection_error
from urlshortener.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Short link DAO backed by Redis hashes.

    Connection setup, `self.redis` and `self.keys` come from RedisClientMixin.
    Every method raises DataStoreError when Redis can't be reached.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, short_link: ShortLinkModel, **kwargs) -> 'ShortLinkRedisDAO':
        """Insert a short link mapping into Redis

        Args:
            short_link (ShortLinkModel):
                ShortLinkModel instance representing the shortened URL mapping.
            **kwargs:
                ttl (int): retention period in seconds. Defaults to one year.

        Returns:
            ShortLinkRedisDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If a short link with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        link_key = self.keys.link_key(short_link.shortcode)
        ttl = int(kwargs.get('ttl', TTL.ONE_YEAR))
        created_at = short_link.created_at or datetime.now(UTC)

        # NOTE: HSETNX + EXPIRE NX run inside one MULTI/EXEC block. A concurrent
        #       insert of the same shortcode can't interleave, so the first writer
        #       keeps both its target and its creation time, and the TTL set by
        #       the first writer is never extended by a losing writer.
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hsetnx(link_key, 'target', short_link.target)
            pipe.hsetnx(link_key, 'created_at', created_at.isoformat())
            pipe.expire(link_key, ttl, nx=True)
            target_set, _, _ = pipe.execute()

        if not target_set:
            raise ShortLinkAlreadyExistsError(f"Short link with code '{short_link.shortcode}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link mapping by shortcode

        Fetches the link hash and its remaining TTL in a single transaction.

        Raises:
            ShortLinkNotFoundError:
                If the short link does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            ShortLinkModel(target='https://example.com', shortcode='abc123', ...)
        """
        link_key = self.keys.link_key(shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hgetall(link_key)
            pipe.ttl(link_key)
            record, ttl = pipe.execute()

        if not record or 'target' not in record:
            raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")

        created_at = record.get('created_at')
        return ShortLinkModel(
            target=record['target'],
            shortcode=shortcode,
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            expires_at=datetime.now(UTC) + timedelta(seconds=ttl) if ttl > 0 else None,
        )

    @handle_redis_connection_error
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve global short link counter

        Example:
            >>> dao.count(increment=False)
            123
            >>> dao.count(increment=True)
            124
        """
        if increment:
            return int(self.redis.incr(self.keys.counter_key()))
        else:
            return int(self.redis.get(self.keys.counter_key()) or 0)
