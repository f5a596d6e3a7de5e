from contextlib import AbstractContextManager
from typing import Iterable

from .scopes import class_table, instance_table
from .table import MemoTable
from .types import ComputeFunction

__all__ = [
    "CachedCalls",
]


class CachedCalls:
    """
    Mixin that gives a class two caches of method results:

    - :meth:`cached_call` stores results on the instance;
    - :meth:`cached_static_call` stores results on the class, shared by all
      its instances and usable from class methods.

    Typical use::

        class Person(CachedCalls):
            def greet(self, greeting, times):
                return self.cached_call("Person.greet", [greeting, times], self._greet)

    The arguments are passed to ``compute`` and are also part of the cache key,
    so they can only be scalars or objects with an identifier.

    Each scope can be switched off, for instance around a single call::

        with self.calls_uncached():
            self.greet("hi", 3)
    """

    def cached_call(self, method_id: str, args: Iterable[object], compute: ComputeFunction) -> object:
        return instance_table(self).get_or_compute(method_id, args, compute)

    @classmethod
    def cached_static_call(cls, method_id: str, args: Iterable[object], compute: ComputeFunction) -> object:
        return class_table(cls).get_or_compute(method_id, args, compute)

    def is_call_cached(self, method_id: str, args: Iterable[object]) -> bool:
        return instance_table(self).is_cached(method_id, args)

    @classmethod
    def is_static_call_cached(cls, method_id: str, args: Iterable[object]) -> bool:
        return class_table(cls).is_cached(method_id, args)

    @property
    def enable_cached_calls(self) -> bool:
        return instance_table(self).enabled

    @enable_cached_calls.setter
    def enable_cached_calls(self, value: bool) -> None:
        instance_table(self).enabled = bool(value)

    @classmethod
    def cached_static_calls_enabled(cls) -> bool:
        return class_table(cls).enabled

    @classmethod
    def set_cached_static_calls_enabled(cls, value: bool) -> None:
        class_table(cls).enabled = bool(value)

    def calls_uncached(self) -> AbstractContextManager[MemoTable]:
        return instance_table(self).disabled()

    @classmethod
    def static_calls_uncached(cls) -> AbstractContextManager[MemoTable]:
        return class_table(cls).disabled()
