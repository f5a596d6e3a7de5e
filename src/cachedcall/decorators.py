import inspect
from typing import Callable, TypeVar

from decorator import decorator

from .exceptions import CachedCallException
from .scopes import class_table, instance_table
from .table import MemoTable

__all__ = [
    "cached_classmethod",
    "cached_method",
]

F = TypeVar("F", bound=Callable)


def _check_signature(func: Callable) -> inspect.Signature:
    sig = inspect.signature(func)
    params = list(sig.parameters.values())
    if not params or params[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        msg = f"Function {func.__qualname__} must take the instance or the class as first argument."
        raise CachedCallException(msg, signature=str(sig))
    for p in params:
        # the key is made of values only; names passed via **kwargs would be lost
        if p.kind == inspect.Parameter.VAR_KEYWORD:
            msg = f"Cannot cache function {func.__qualname__} with a **{p.name} parameter."
            raise CachedCallException(msg, signature=str(sig))
    return sig


def _make_caller(func: Callable, get_table: Callable[[object], MemoTable]):
    sig = _check_signature(func)
    method_id = f"{func.__module__}.{func.__qualname__}"

    def caller(f, owner, *args, **kwargs):
        bound = sig.bind(owner, *args, **kwargs)
        bound.apply_defaults()
        # keyword-only values follow the positional ones, in signature order
        key_args = bound.args[1:] + tuple(bound.kwargs.values())

        def compute(*_):
            return f(*bound.args, **bound.kwargs)

        return get_table(owner).get_or_compute(method_id, key_args, compute)

    return caller


def cached_method(func: F) -> F:
    """
    Caches the results of an instance method on the instance.

    The method identifier is the module and qualified name of the function.
    The cache of an instance can be switched off with
    ``instance_table(obj).enabled = False``.
    """
    return decorator(_make_caller(func, instance_table), func)


def cached_classmethod(func: F) -> F:
    """
    Caches the results of a class method on the class.

    Use it below ``@classmethod``::

        @classmethod
        @cached_classmethod
        def lookup(cls, code): ...
    """
    return decorator(_make_caller(func, class_table), func)
