"""
Fail-closed access to pricing tables.

Every table read in the engine goes through lookup_with_default so malformed
client input resolves to a safe default and leaves a data-quality flag that
the confidence scorer and the assumptions list can act on.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class TableLookup(Generic[V]):
    """
    Result of a fail-closed table read.

    Attributes:
        table: Name of the table that was read
        requested: Key the caller asked for
        key: Key that was actually used
        value: Table value for that key
        fell_back: True when the requested key was not in the table
    """

    table: str
    requested: Any
    key: str
    value: V
    fell_back: bool = False

    @property
    def flag(self) -> Optional[str]:
        """Data-quality flag text, or None when no fallback happened."""
        if not self.fell_back:
            return None
        return f"unknown {self.table} '{self.requested}', used '{self.key}'"


def normalize_key(key: Any) -> str:
    """Lower-case, trimmed string form of a table key."""
    if key is None:
        return ""
    value = getattr(key, "value", key)
    return str(value).strip().lower()


def lookup_with_default(
    table: Mapping[str, V],
    key: Any,
    default_key: str,
    table_name: str,
) -> TableLookup[V]:
    """
    Read a table entry, falling back to a default key when it is missing.

    Args:
        table: Lookup table keyed by lower-case strings
        key: Requested key (string or str-valued Enum)
        default_key: Key used when the requested one is unknown
        table_name: Human-readable table name for logs and flags

    Returns:
        TableLookup describing the value used

    Raises:
        KeyError: If the default key itself is missing from the table
    """
    normalized = normalize_key(key)
    if normalized in table:
        return TableLookup(table=table_name, requested=key, key=normalized, value=table[normalized])

    logger.warning(
        f"Unknown {table_name} '{key}', falling back to '{default_key}'",
        extra={"table": table_name, "requested_key": str(key)},
    )
    return TableLookup(
        table=table_name,
        requested=key,
        key=default_key,
        value=table[default_key],
        fell_back=True,
    )
