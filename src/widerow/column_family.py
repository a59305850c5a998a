"""
Column Family Model
Binds a wide-row table to its session, codecs and prepared statements.
"""
import logging
from typing import Any, Dict, Optional

from cassandra import ConsistencyLevel
from cassandra.query import BatchStatement, BatchType

from .codecs import BytesCodec, Codec, Utf8Codec
from .mapper import ttl_to_engine
from .models import ColumnRange, DeleteColumn, DropRow, MutationBatch, PutColumn

logger = logging.getLogger(__name__)


# =============================================================================
# CQL Builders
# =============================================================================

def select_cql(table: str, ascending: bool, has_lower: bool, has_upper: bool) -> str:
    """
    SELECT over one row's columns.

    Bind order: key, lower bound (if any), upper bound (if any), limit.
    """
    clauses = ["key = ?"]
    if has_lower:
        clauses.append("column1 >= ?")
    if has_upper:
        clauses.append("column1 <= ?")
    order = "ASC" if ascending else "DESC"
    return (
        f"SELECT column1, value, TTL(value) FROM {table} "
        f"WHERE {' AND '.join(clauses)} "
        f"ORDER BY column1 {order} LIMIT ?"
    )


def insert_cql(table: str) -> str:
    """Upsert one column. A TTL of 0 writes a column that never expires."""
    return f"INSERT INTO {table} (key, column1, value) VALUES (?, ?, ?) USING TTL ?"


def delete_row_cql(table: str) -> str:
    return f"DELETE FROM {table} WHERE key = ?"


def delete_column_cql(table: str) -> str:
    return f"DELETE FROM {table} WHERE key = ? AND column1 = ?"


def select_name(ascending: bool, has_lower: bool, has_upper: bool) -> str:
    """Statement cache key for a select variant, e.g. 'select_desc_lower'."""
    parts = ["select", "asc" if ascending else "desc"]
    if has_lower:
        parts.append("lower")
    if has_upper:
        parts.append("upper")
    return "_".join(parts)


# =============================================================================
# Enum Lookups
# =============================================================================

def consistency_level(name: Optional[str]) -> Optional[int]:
    """Resolve a consistency level name such as 'LOCAL_QUORUM'."""
    if not name:
        return None
    try:
        return ConsistencyLevel.name_to_value[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown consistency level: {name}") from None


def batch_type(name: str) -> BatchType:
    """Resolve a batch type name: LOGGED or UNLOGGED."""
    if name.upper() not in ("LOGGED", "UNLOGGED"):
        raise ValueError(f"Unsupported batch type: {name}")
    return getattr(BatchType, name.upper())


# =============================================================================
# Column Family Model
# =============================================================================

class ColumnFamilyModel:
    """
    A wide-row table together with everything needed to query it.

    The model holds only shared, read-only state: the session, the codecs
    and statements prepared once by prepare(). It is safe to use from
    concurrent calls.
    """

    def __init__(
        self,
        session,
        table: str,
        key_codec: Optional[Codec] = None,
        name_codec: Optional[Codec] = None,
        value_codec: Optional[Codec] = None,
        read_consistency: Optional[str] = None,
        write_consistency: Optional[str] = None,
        batch: str = "LOGGED"
    ):
        """
        Initialize column family model.

        Args:
            session: Cassandra session executing statements
            table: Table name, optionally keyspace-qualified
            key_codec: Row key codec (default: UTF-8)
            name_codec: Order-preserving column name codec (default: UTF-8)
            value_codec: Column value codec (default: raw bytes)
            read_consistency: Consistency level name for reads
            write_consistency: Consistency level name for batches
            batch: Batch type name for mutations
        """
        self.session = session
        self.table = table
        self.key_codec = key_codec or Utf8Codec()
        self.name_codec = name_codec or Utf8Codec()
        self.value_codec = value_codec or BytesCodec()
        self.read_consistency = consistency_level(read_consistency)
        self.write_consistency = consistency_level(write_consistency)
        self.batch_type = batch_type(batch)
        self._prepared: Dict[str, Any] = {}

    def prepare(self) -> "ColumnFamilyModel":
        """Prepare every statement the driver issues against this table."""
        logger.info(f"Preparing statements for column family {self.table}")

        for ascending in (True, False):
            for has_lower in (False, True):
                for has_upper in (False, True):
                    name = select_name(ascending, has_lower, has_upper)
                    prepared = self.session.prepare(
                        select_cql(self.table, ascending, has_lower, has_upper)
                    )
                    if self.read_consistency is not None:
                        prepared.consistency_level = self.read_consistency
                    self._prepared[name] = prepared

        self._prepared["insert"] = self.session.prepare(insert_cql(self.table))
        self._prepared["delete_row"] = self.session.prepare(delete_row_cql(self.table))
        self._prepared["delete_column"] = self.session.prepare(delete_column_cql(self.table))
        return self

    @property
    def prepared(self) -> Dict[str, Any]:
        return self._prepared

    def statement(self, name: str):
        """Get a prepared statement by name."""
        if not self._prepared:
            raise RuntimeError(
                f"Column family {self.table} has no prepared statements; call prepare() first"
            )
        return self._prepared[name]

    # =========================================================================
    # Read Path
    # =========================================================================

    def bind_select(self, row_key: Any, column_range: ColumnRange):
        """
        Bind a single-page select for column_range.

        Paging is disabled, so the engine answers with at most
        column_range.limit rows in one response.
        """
        lower, upper = column_range.lower, column_range.upper
        prepared = self.statement(
            select_name(column_range.ascending, lower is not None, upper is not None)
        )

        params = [self.key_codec.encode(row_key)]
        if lower is not None:
            params.append(lower)
        if upper is not None:
            params.append(upper)
        params.append(column_range.limit)

        bound = prepared.bind(params)
        bound.fetch_size = None
        return bound

    # =========================================================================
    # Write Path
    # =========================================================================

    def batch_statement(self, mutation: MutationBatch) -> BatchStatement:
        """Render mutation intents, in order, into one batch statement."""
        batch = BatchStatement(
            batch_type=self.batch_type,
            consistency_level=self.write_consistency
        )
        key = self.key_codec.encode(mutation.row_key)

        for intent in mutation.intents:
            if isinstance(intent, DropRow):
                batch.add(self.statement("delete_row"), (key,))
            elif isinstance(intent, DeleteColumn):
                batch.add(
                    self.statement("delete_column"),
                    (key, self.name_codec.encode(intent.name))
                )
            elif isinstance(intent, PutColumn):
                column = intent.column
                batch.add(
                    self.statement("insert"),
                    (
                        key,
                        self.name_codec.encode(column.name),
                        self.value_codec.encode(column.value),
                        ttl_to_engine(column.ttl_seconds),
                    )
                )
            else:
                raise TypeError(f"Unknown mutation intent: {intent!r}")

        return batch
