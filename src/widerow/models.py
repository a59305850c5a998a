"""
Wide Row Domain Models
Storage-agnostic entries, column ranges and mutation intents.
"""
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Optional, Tuple, TypeVar, Union

RowKey = TypeVar("RowKey")
ColName = TypeVar("ColName")
ColValue = TypeVar("ColValue")


# =============================================================================
# Entries
# =============================================================================

@dataclass(frozen=True)
class EntryColumn(Generic[ColName, ColValue]):
    """
    One named column of a wide row.

    ttl_seconds of None means the column does not expire.
    """
    name: ColName
    value: ColValue
    ttl_seconds: Optional[int] = None


@dataclass(frozen=True)
class Entry(Generic[RowKey, ColName, ColValue]):
    """A column read back from a specific row."""
    row_key: RowKey
    column: EntryColumn[ColName, ColValue]


# =============================================================================
# Column Range
# =============================================================================

@dataclass(frozen=True)
class ColumnRange:
    """
    Directional, optionally bounded, count-limited selection over a row.

    Bounds are inclusive and expressed in scan order: when the range is
    descending, start is the upper bound and end the lower one.
    """
    ascending: bool = True
    start: Optional[bytes] = None
    end: Optional[bytes] = None
    limit: int = 100

    @property
    def reversed(self) -> bool:
        return not self.ascending

    @classmethod
    def build(
        cls,
        ascending: bool,
        start: Optional[Any] = None,
        end: Optional[Any] = None,
        limit: int = 100,
        name_codec=None
    ) -> "ColumnRange":
        """
        Build a range, encoding present bounds with the column name codec.

        Args:
            ascending: Scan direction
            start: Optional first column name in scan order
            end: Optional last column name in scan order
            limit: Maximum number of columns to return
            name_codec: Codec used to encode start and end

        Returns:
            ColumnRange with encoded bounds
        """
        encode = name_codec.encode if name_codec is not None else (lambda name: name)
        return cls(
            ascending=ascending,
            start=encode(start) if start is not None else None,
            end=encode(end) if end is not None else None,
            limit=limit,
        )

    @property
    def lower(self) -> Optional[bytes]:
        """Lower bound in column name order."""
        return self.start if self.ascending else self.end

    @property
    def upper(self) -> Optional[bytes]:
        """Upper bound in column name order."""
        return self.end if self.ascending else self.start


# =============================================================================
# Mutation Intents
# =============================================================================

@dataclass(frozen=True)
class DropRow:
    """Delete the whole row."""


@dataclass(frozen=True)
class DeleteColumn:
    """Delete one column by name."""
    name: Any


@dataclass(frozen=True)
class PutColumn:
    """Upsert one column, optionally with a TTL."""
    column: EntryColumn


MutationIntent = Union[DropRow, DeleteColumn, PutColumn]


@dataclass(frozen=True)
class MutationBatch:
    """Ordered mutation intents scoped to a single row."""
    row_key: Any
    intents: Tuple[MutationIntent, ...] = field(default_factory=tuple)

    @classmethod
    def compose(
        cls,
        row_key: Any,
        drop: bool = False,
        remove: Iterable[Any] = (),
        insert: Iterable[EntryColumn] = ()
    ) -> "MutationBatch":
        """
        Compose a batch: row drop first, then column removals, then inserts.
        """
        intents: List[MutationIntent] = []
        if drop:
            intents.append(DropRow())
        intents.extend(DeleteColumn(name) for name in remove)
        intents.extend(PutColumn(column) for column in insert)
        return cls(row_key=row_key, intents=tuple(intents))

    @property
    def drops_row(self) -> bool:
        return any(isinstance(intent, DropRow) for intent in self.intents)

    @property
    def puts(self) -> List[PutColumn]:
        return [intent for intent in self.intents if isinstance(intent, PutColumn)]

    def is_empty(self) -> bool:
        return not self.intents
