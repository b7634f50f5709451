"""Errors raised by short link data access objects.

Example:
    >>> dao.get('abc123')
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.ShortLinkNotFoundError: Short link with code 'abc123' not found.
"""

from urlshortener.exceptions import UrlShortenerError


class DAOError(UrlShortenerError):
    error_code = 'dao:dao_error'


class ShortLinkNotFoundError(DAOError):
    """No record is stored under the requested shortcode (never issued or expired)."""

    error_code = 'dao:short_link_not_found'


class ShortLinkAlreadyExistsError(DAOError):
    """The shortcode is taken. The stored record was left untouched."""

    error_code = 'dao:short_link_already_exists'


class DataStoreError(DAOError):
    """The data store is unreachable or failed the operation (connection refused, timeout, OOM)."""

    error_code = 'dao:data_store_error'
