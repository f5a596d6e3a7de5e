from zuper_commons.types import ZException

__all__ = [
    "CachedCallException",
    "CompositeArgumentError",
    "InvalidMethodID",
    "UnidentifiableArgumentError",
    "UnsupportedArgumentError",
    "UnsupportedArgumentKindError",
]


class CachedCallException(ZException):
    pass


class UnsupportedArgumentError(CachedCallException):
    """
    An argument of a call cannot be encoded in a cache key.

    Raised only while deriving keys; the computation itself is never
    invoked when this is raised.
    """


class InvalidMethodID(UnsupportedArgumentError):
    """The method identifier is not a string."""


class CompositeArgumentError(UnsupportedArgumentError):
    """The argument is a collection (list, dict, set, iterator, ...)."""


class UnidentifiableArgumentError(UnsupportedArgumentError):
    """The argument is an object without a recognizable identifier."""


class UnsupportedArgumentKindError(UnsupportedArgumentError):
    """The argument is of a kind with no encoding (None, classes, functions...)."""
