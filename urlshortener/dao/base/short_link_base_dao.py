"""Storage-independent contract for short link DAOs.

A DAO keeps the shortcode -> target URL mapping and a global counter the
shorten handler draws shortcodes from. Records are immutable once written and
expire on their own; there is no update or delete operation.
"""

from abc import ABC, abstractmethod

from urlshortener.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface every short link data store implements.

    All methods raise DataStoreError when the data store can't be reached.
    """

    @abstractmethod
    def insert(self, short_link: ShortLinkModel, **kwargs) -> 'ShortLinkBaseDAO':
        """Store `short_link` unless its shortcode is already taken.

        The check and the write happen atomically: of two concurrent inserts of
        the same shortcode exactly one succeeds, the other raises
        ShortLinkAlreadyExistsError and changes nothing.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)
        """

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Fetch the record stored under `shortcode`.

        Raises:
            ShortLinkNotFoundError: If nothing is stored under `shortcode`.
        """

    @abstractmethod
    def count(self, increment: bool = False, **kwargs) -> int:
        """Return the global counter (0 if never incremented), incrementing it first if asked."""
