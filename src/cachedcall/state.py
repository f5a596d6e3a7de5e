import threading
from typing import ClassVar, TYPE_CHECKING

if TYPE_CHECKING:
    from .table import MemoTable

__all__ = [
    "CachedCallGlobalState",
]


class CachedCallGlobalState:
    class ClassTables:
        # class -> table shared by all its instances; never torn down
        tables: "ClassVar[dict[type, MemoTable]]" = {}
        # guards the lazy creation of the tables above
        lock: ClassVar[threading.Lock] = threading.Lock()
