"""
Wide Row Driver
Range-bounded fetch and batched mutate over a Cassandra column family.
"""
import asyncio
import logging
from typing import Any, Iterable, List, Optional

from .column_family import ColumnFamilyModel
from .instrumentation import Instrumentation, no_instrumentation
from .mapper import map_columns
from .models import ColumnRange, Entry, EntryColumn, MutationBatch

logger = logging.getLogger(__name__)


def _settle_result(future: asyncio.Future, result: Any) -> None:
    if not future.done():
        future.set_result(result)


def _settle_exception(future: asyncio.Future, error: BaseException) -> None:
    if not future.done():
        future.set_exception(error)


class WideRowDriver:
    """
    Reads and writes wide rows of one column family.

    The driver is stateless between calls. Every operation is a coroutine
    that issues exactly one request and completes on the caller's event
    loop. Engine and codec errors are raised unchanged; there are no
    retries.
    """

    def __init__(
        self,
        column_family: ColumnFamilyModel,
        instrument: Instrumentation = no_instrumentation,
        reject_drop_with_insert: bool = False
    ):
        """
        Initialize driver.

        Args:
            column_family: Prepared column family model
            instrument: Hook wrapping each operation, e.g. for timing
            reject_drop_with_insert: Raise ValueError instead of submitting
                a batch that drops the row and inserts columns
        """
        self.column_family = column_family
        self.instrument = instrument
        self.reject_drop_with_insert = reject_drop_with_insert

    # =========================================================================
    # Read Path
    # =========================================================================

    async def fetch_data(
        self,
        row_key: Any,
        ascending: bool = True,
        from_column: Optional[Any] = None,
        to_column: Optional[Any] = None,
        limit: int = 100
    ) -> List[Entry]:
        """
        Fetch up to limit columns of a row in one round trip.

        Args:
            row_key: Row to read
            ascending: Scan direction over column names
            from_column: Optional first column name in scan order (inclusive)
            to_column: Optional last column name in scan order (inclusive)
            limit: Maximum number of entries to return

        Returns:
            Entries in scan order
        """
        intercept = self.instrument("fetch_data")
        try:
            return await intercept(
                self._fetch(row_key, ascending, from_column, to_column, limit)
            )
        except Exception as e:
            self._log_failure("fetch_data", row_key, e)
            raise

    async def _fetch(
        self,
        row_key: Any,
        ascending: bool,
        from_column: Optional[Any],
        to_column: Optional[Any],
        limit: int
    ) -> List[Entry]:
        # CQL rejects LIMIT 0
        if limit == 0:
            return []

        cf = self.column_family
        column_range = ColumnRange.build(
            ascending=ascending,
            start=from_column,
            end=to_column,
            limit=limit,
            name_codec=cf.name_codec
        )
        statement = cf.bind_select(row_key, column_range)

        rows = await self._execute(statement)
        entries = map_columns(row_key, rows, cf.name_codec, cf.value_codec)

        logger.debug(
            f"Fetched {len(entries)} columns from {cf.table}[{row_key!r}] "
            f"(ascending={ascending}, limit={limit})"
        )
        return entries

    # =========================================================================
    # Write Path
    # =========================================================================

    async def update(
        self,
        row_key: Any,
        drop: bool = False,
        remove: Iterable[Any] = (),
        insert: Iterable[EntryColumn] = ()
    ) -> None:
        """
        Apply a row drop, column removals and column inserts as one batch.

        Within a Cassandra batch every statement shares one write timestamp
        and deletions win timestamp ties, so inserts sent together with
        drop=True are shadowed by the row deletion.

        Args:
            row_key: Row to mutate
            drop: Delete the entire row
            remove: Column names to delete
            insert: Columns to upsert, each with an optional TTL
        """
        intercept = self.instrument("update")
        try:
            await intercept(self._update(row_key, drop, remove, insert))
        except Exception as e:
            self._log_failure("update", row_key, e)
            raise

    async def _update(
        self,
        row_key: Any,
        drop: bool,
        remove: Iterable[Any],
        insert: Iterable[EntryColumn]
    ) -> None:
        cf = self.column_family
        mutation = MutationBatch.compose(row_key, drop=drop, remove=remove, insert=insert)

        if mutation.is_empty():
            logger.debug(f"Nothing to apply to {cf.table}[{row_key!r}]")
            return

        if mutation.drops_row and mutation.puts:
            if self.reject_drop_with_insert:
                raise ValueError(
                    f"Refusing to drop row {row_key!r} and insert columns in one batch"
                )
            logger.warning(
                f"Dropping {cf.table}[{row_key!r}] together with "
                f"{len(mutation.puts)} inserts; the inserts will be shadowed"
            )

        statement = cf.batch_statement(mutation)
        await self._execute(statement)

        logger.debug(
            f"Applied {len(mutation.intents)} mutations to {cf.table}[{row_key!r}]"
        )

    # =========================================================================
    # Execution
    # =========================================================================

    def _log_failure(self, operation: str, row_key: Any, error: Exception) -> None:
        logger.warning(f"{operation} failed for {self.column_family.table}[{row_key!r}]: {error}")

    async def _execute(self, statement):
        """
        Execute a statement and await its ResponseFuture on the running loop.

        The driver completes the ResponseFuture on its own I/O thread; the
        outcome is handed to the caller's loop with call_soon_threadsafe.
        """
        loop = asyncio.get_running_loop()
        result = loop.create_future()

        def on_success(rows):
            loop.call_soon_threadsafe(_settle_result, result, rows)

        def on_error(error):
            loop.call_soon_threadsafe(_settle_exception, result, error)

        response_future = self.column_family.session.execute_async(statement)
        response_future.add_callbacks(on_success, on_error)
        return await result
