"""Error taxonomy shared by the domain layer."""


class BookkeepError(Exception):
    """Base class for every recoverable library error."""


class ValidationError(BookkeepError, ValueError):
    """Malformed item or event data supplied by the caller."""


class InvalidEvent(ValidationError):
    """A history event was built with fields its kind does not allow."""


class IllegalTransition(BookkeepError):
    """Operation not permitted in the item's current reading state."""


class NotFoundError(BookkeepError, LookupError):
    """A shelf, title or item id lookup matched nothing."""


class UnsupportedCapability(BookkeepError):
    """Operation invoked on an item kind that structurally lacks it.

    Unlike IllegalTransition this never goes away: a wishlist item has no
    reading progress at all.
    """
