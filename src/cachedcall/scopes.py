import copy

from zuper_commons.types import check_isinstance
from . import logger
from .constants import CachedCallConstants
from .exceptions import CachedCallException
from .state import CachedCallGlobalState
from .table import MemoTable

__all__ = [
    "class_table",
    "instance_table",
    "known_class_tables",
]


def instance_table(obj: object) -> MemoTable:
    """
    Returns the table of the calls made on ``obj``, creating it on first use.

    The table is stored on the instance itself and goes away with it.
    A copy of the instance (copy.copy, copy.deepcopy, pickling) gets its
    own table, starting from the entries and switch of the original.
    """
    attr = CachedCallConstants.instance_table_attr
    try:
        d = vars(obj)
    except TypeError as e:
        msg = f"Cannot attach a cache to an object of type {type(obj).__qualname__} (no __dict__)."
        raise CachedCallException(msg, attr=attr) from e

    table = d.get(attr)
    if table is None:
        table = MemoTable(name=f"{type(obj).__qualname__} instance")
    elif table.owner_id != id(obj):
        # inherited from the object this one was copied from
        table = copy.copy(table)
    else:
        return table
    table.owner_id = id(obj)
    d[attr] = table
    return table


def class_table(cls: type) -> MemoTable:
    """
    Returns the table shared by all instances of ``cls``, creating it on first use.

    Tables are keyed on the class object: a subclass has its own table.
    They live as long as the process.
    """
    check_isinstance(cls, type)
    tables = CachedCallGlobalState.ClassTables.tables
    table = tables.get(cls)
    if table is None:
        with CachedCallGlobalState.ClassTables.lock:
            table = tables.get(cls)
            if table is None:
                table = tables[cls] = MemoTable(locked=True, name=cls.__qualname__)
                logger.debug(f"created class table for {cls.__module__}.{cls.__qualname__}")
    return table


def known_class_tables() -> dict[type, MemoTable]:
    """Returns a snapshot of the class tables created so far."""
    with CachedCallGlobalState.ClassTables.lock:
        return dict(CachedCallGlobalState.ClassTables.tables)
