from typing import Callable, NewType, Protocol, runtime_checkable

__all__ = [
    "CacheKey",
    "ComputeFunction",
    "Identifiable",
]

CacheKey = NewType("CacheKey", str)

ComputeFunction = Callable[..., object]


@runtime_checkable
class Identifiable(Protocol):
    """Objects that can be used as arguments of cached calls.

    The value returned by ``cache_identifier()`` must be stable for the
    lifetime of the object and unique among the instances of its class.
    """

    def cache_identifier(self) -> object: ...
