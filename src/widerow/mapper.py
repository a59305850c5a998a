"""
Result Mapper
Converts raw engine columns into ordered Entry objects.
"""
from typing import Any, Iterable, List, Optional, Sequence

from .models import Entry, EntryColumn

# TTL the engine reports, and accepts, for columns that never expire
NO_EXPIRATION = 0


def ttl_from_engine(raw_ttl: Optional[int]) -> Optional[int]:
    """Engine TTL -> optional seconds. Zero and null both mean no expiration."""
    if raw_ttl is None or raw_ttl == NO_EXPIRATION:
        return None
    return int(raw_ttl)


def ttl_to_engine(ttl_seconds: Optional[int]) -> int:
    """Optional seconds -> engine TTL."""
    if ttl_seconds is None:
        return NO_EXPIRATION
    return int(ttl_seconds)


def map_column(row_key: Any, raw: Sequence[Any], name_codec, value_codec) -> Entry:
    name, value, raw_ttl = raw[0], raw[1], raw[2]
    return Entry(
        row_key=row_key,
        column=EntryColumn(
            name=name_codec.decode(name),
            value=value_codec.decode(value),
            ttl_seconds=ttl_from_engine(raw_ttl),
        ),
    )


def map_columns(
    row_key: Any,
    rows: Optional[Iterable[Sequence[Any]]],
    name_codec,
    value_codec
) -> List[Entry]:
    """
    Map raw (name, value, ttl) rows to entries.

    Every row is mapped, in input order; nothing is filtered or reordered.

    Args:
        row_key: Row the columns were read from
        rows: Raw rows as returned by the engine, may be None for no rows
        name_codec: Codec decoding column names
        value_codec: Codec decoding column values

    Returns:
        List of Entry in the same order as rows
    """
    if not rows:
        return []
    return [map_column(row_key, raw, name_codec, value_codec) for raw in rows]
