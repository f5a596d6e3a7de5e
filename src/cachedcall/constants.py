from typing import ClassVar

__all__ = [
    "CachedCallConstants",
]


class CachedCallConstants:
    """Arbitrary constants used in the code."""

    # DO NOT change these -- they are part of the format of the cache keys
    key_separator: ClassVar[str] = " | "
    identifier_separator: ClassVar[str] = "#"
    # Attribute names probed, in this order, to identify an object argument.
    identifier_fields: ClassVar[tuple[str, ...]] = ("ID", "id", "Id", "iD")
    identifier_method: ClassVar[str] = "cache_identifier"

    # Attribute under which an instance keeps its own table
    instance_table_attr: ClassVar[str] = "_cached_calls"

    default_enabled: ClassVar[bool] = True

    # Log every hit/miss/bypass at debug level
    debug_log_calls: ClassVar[bool] = False
