import copy
import threading
from contextlib import contextmanager, nullcontext
from typing import ContextManager, Iterable, Iterator, MutableMapping, Optional

from . import logger
from .constants import CachedCallConstants
from .keys import build_key
from .types import CacheKey, ComputeFunction

__all__ = [
    "MemoTable",
    "get_or_compute",
    "is_cached",
]


def get_or_compute(
    method_id: str,
    args: Iterable[object],
    compute: ComputeFunction,
    enabled: bool,
    table: MutableMapping[CacheKey, object],
) -> object:
    """
    Returns the result of ``compute(*args)``, computing it only if the
    call ``(method_id, args)`` is not already in ``table``.

    If ``enabled`` is false the table is neither read nor written.
    A stored ``None`` counts as a hit. If ``compute`` raises,
    the exception propagates and nothing is stored.
    """
    args = tuple(args)
    if not enabled:
        if CachedCallConstants.debug_log_calls:
            logger.debug(f"cache disabled for {method_id}")
        return compute(*args)

    key = build_key(method_id, args)
    # Use "in", not the value: a call that returned None is still cached.
    if key in table:
        if CachedCallConstants.debug_log_calls:
            logger.debug(f"hit: {key}")
        return table[key]

    if CachedCallConstants.debug_log_calls:
        logger.debug(f"miss: {key}")
    result = compute(*args)
    table[key] = result
    return result


def is_cached(method_id: str, args: Iterable[object], table: MutableMapping[CacheKey, object]) -> bool:
    """Returns true if the call ``(method_id, args)`` has a stored result."""
    return build_key(method_id, tuple(args)) in table


class MemoTable:
    """
    The results of the calls of one scope (an instance or a class),
    together with the switch that enables the cache for that scope.

    Tables that are shared between threads must be created with
    ``locked=True``. The lock only guards the bookkeeping: a key being
    computed is marked as in flight, the computation runs without the
    lock, and other callers of the same key wait for its result. Each key
    is computed at most once, while different keys are computed
    concurrently.

    Copying a table (``copy.copy``) gives an independent table with the
    same entries and switch.
    """

    entries: dict[CacheKey, object]
    enabled: bool
    name: Optional[str]
    # id() of the instance the table is attached to, if any
    owner_id: Optional[int]

    def __init__(self, *, enabled: Optional[bool] = None, locked: bool = False, name: Optional[str] = None):
        self.entries = {}
        self.enabled = CachedCallConstants.default_enabled if enabled is None else enabled
        self.name = name
        self.owner_id = None
        self._lock = threading.Lock() if locked else None
        # key -> event set when the computation of the key ends
        self._in_flight: dict[CacheKey, threading.Event] = {}

    @property
    def locked(self) -> bool:
        return self._lock is not None

    def _guard(self) -> ContextManager:
        return self._lock if self._lock is not None else nullcontext()

    def get_or_compute(
        self,
        method_id: str,
        args: Iterable[object],
        compute: ComputeFunction,
        enabled: Optional[bool] = None,
    ) -> object:
        """Like :func:`get_or_compute`; ``enabled`` defaults to the table's switch."""
        if enabled is None:
            enabled = self.enabled
        if not enabled or self._lock is None:
            return get_or_compute(method_id, args, compute, enabled, self.entries)

        args = tuple(args)
        key = build_key(method_id, args)
        while True:
            with self._lock:
                if key in self.entries:
                    if CachedCallConstants.debug_log_calls:
                        logger.debug(f"hit: {key}")
                    return self.entries[key]
                done = self._in_flight.get(key)
                if done is None:
                    done = self._in_flight[key] = threading.Event()
                    break
            # someone else is computing it; if they fail, we try ourselves
            done.wait()

        if CachedCallConstants.debug_log_calls:
            logger.debug(f"miss: {key}")
        try:
            result = compute(*args)
            with self._lock:
                self.entries[key] = result
            return result
        finally:
            with self._lock:
                del self._in_flight[key]
            done.set()

    def is_cached(self, method_id: str, args: Iterable[object]) -> bool:
        with self._guard():
            return is_cached(method_id, args, self.entries)

    def reset(self) -> None:
        """Forgets all the stored results."""
        with self._guard():
            self.entries = {}

    @contextmanager
    def disabled(self) -> Iterator["MemoTable"]:
        """Bypasses the cache inside the block; the previous switch is restored afterwards."""
        previous = self.enabled
        self.enabled = False
        try:
            yield self
        finally:
            self.enabled = previous

    def __copy__(self) -> "MemoTable":
        other = MemoTable(enabled=self.enabled, locked=self.locked, name=self.name)
        with self._guard():
            other.entries = dict(self.entries)
        return other

    def __deepcopy__(self, memo: dict) -> "MemoTable":
        other = MemoTable(enabled=self.enabled, locked=self.locked, name=self.name)
        with self._guard():
            entries = dict(self.entries)
        other.entries = copy.deepcopy(entries, memo)
        return other

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"MemoTable({self.name!r}, entries={len(self.entries)}, enabled={self.enabled})"
