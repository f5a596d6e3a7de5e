import numbers
import types
from collections.abc import Iterable, Sequence
from typing import Optional

from .constants import CachedCallConstants
from .exceptions import (
    CompositeArgumentError,
    InvalidMethodID,
    UnidentifiableArgumentError,
    UnsupportedArgumentKindError,
)
from .types import CacheKey

__all__ = [
    "ArgumentKind",
    "build_key",
    "describe_argument_kind",
    "get_identifier",
]


class ArgumentKind:
    scalar = "scalar"
    composite = "composite"
    reference = "reference"
    unsupported = "unsupported"


# Values of these types are not objects we can identify, even if they
# happen to have an ``id`` attribute.
_no_encoding = (
    type(None),
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.CoroutineType,
)


def describe_argument_kind(value: object) -> str:
    """Classifies a value as one of the :class:`ArgumentKind` values."""
    if isinstance(value, (str, numbers.Number)):
        return ArgumentKind.scalar
    # before iterables: a class whose metaclass defines __iter__ (Enum) is iterable
    if isinstance(value, _no_encoding):
        return ArgumentKind.unsupported
    if isinstance(value, Iterable):
        return ArgumentKind.composite
    return ArgumentKind.reference


def get_identifier(value: object) -> Optional[object]:
    """
    Returns the identifier of an object, or None if it has none.

    Objects implementing ``cache_identifier()`` are asked first; otherwise
    the attributes ``ID``, ``id``, ``Id``, ``iD`` are tried in this order
    and the first one that is present and not None is used.
    """
    method = getattr(value, CachedCallConstants.identifier_method, None)
    if callable(method):
        identifier = method()
        if identifier is not None:
            return identifier

    for field in CachedCallConstants.identifier_fields:
        identifier = getattr(value, field, None)
        if identifier is not None:
            return identifier
    return None


def _token(method_id: str, position: int, value: object) -> str:
    kind = describe_argument_kind(value)
    if kind == ArgumentKind.scalar:
        return str(value)

    type_name = type(value).__qualname__
    if kind == ArgumentKind.composite:
        msg = f"Cannot cache calls with composite parameters ({type_name} at position {position})."
        raise CompositeArgumentError(msg, method_id=method_id, position=position, type_name=type_name)

    if kind == ArgumentKind.reference:
        identifier = get_identifier(value)
        if identifier is None:
            msg = (
                f"Cannot cache calls with an object of type {type_name} as a parameter: "
                f"it has no recognizable identifier."
            )
            raise UnidentifiableArgumentError(
                msg,
                method_id=method_id,
                position=position,
                type_name=type_name,
                tried=list(CachedCallConstants.identifier_fields),
            )
        return f"{type_name}{CachedCallConstants.identifier_separator}{identifier}"

    msg = f"Cannot cache calls with a parameter of this kind: {type_name}."
    raise UnsupportedArgumentKindError(msg, method_id=method_id, position=position, type_name=type_name)


def build_key(method_id: str, args: Sequence[object]) -> CacheKey:
    """
    Derives the key identifying a call of ``method_id`` with ``args``.

    The key is the method identifier followed by one token per argument,
    joined by ``" | "``. Scalars are rendered verbatim and objects as
    ``TypeName#identifier``; anything else raises a subclass of
    :class:`UnsupportedArgumentError`.

    Text is not escaped: a string argument containing ``" | "`` or shaped
    like ``TypeName#identifier`` can give the same key as a different
    argument list, e.g. ``["a | b"]`` and ``["a", "b"]``.
    """
    if not isinstance(method_id, str):
        raise InvalidMethodID("The method identifier must be a string.", method_id=method_id)

    parts = [method_id]
    for position, value in enumerate(args):
        parts.append(_token(method_id, position, value))
    return CacheKey(CachedCallConstants.key_separator.join(parts))
