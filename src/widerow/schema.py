"""
Wide Row Schema
CQL definitions for keyspaces and wide-row column families.
"""
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def qualified_name(table: str, keyspace: Optional[str] = None) -> str:
    return f"{keyspace}.{table}" if keyspace else table


def keyspace_cql(keyspace: str, replication_factor: int = 1) -> str:
    """CREATE KEYSPACE statement using SimpleStrategy."""
    return (
        f"CREATE KEYSPACE IF NOT EXISTS {keyspace} "
        f"WITH replication = {{'class': 'SimpleStrategy', "
        f"'replication_factor': {replication_factor}}}"
    )


def table_cql(table: str, keyspace: Optional[str] = None) -> str:
    """
    CREATE TABLE statement for a wide-row column family.

    One partition per row key, one clustering row per column. Keys, names
    and values are blobs produced by the column family's codecs.
    """
    return f"""
        CREATE TABLE IF NOT EXISTS {qualified_name(table, keyspace)} (
            key blob,
            column1 blob,
            value blob,
            PRIMARY KEY ((key), column1)
        ) WITH CLUSTERING ORDER BY (column1 ASC)
    """


def create_column_family(
    session,
    table: str,
    keyspace: Optional[str] = None,
    replication_factor: int = 1
) -> None:
    """
    Create the keyspace (when given) and the wide-row table.

    Args:
        session: Cassandra session
        table: Column family table name
        keyspace: Keyspace to create the table in
        replication_factor: Replication factor for a new keyspace
    """
    if keyspace:
        logger.info(f"Ensuring keyspace {keyspace} (rf={replication_factor})")
        session.execute(keyspace_cql(keyspace, replication_factor))

    logger.info(f"Ensuring column family {qualified_name(table, keyspace)}")
    session.execute(table_cql(table, keyspace))


def drop_column_family(session, table: str, keyspace: Optional[str] = None) -> None:
    logger.warning(f"Dropping column family {qualified_name(table, keyspace)}")
    session.execute(f"DROP TABLE IF EXISTS {qualified_name(table, keyspace)}")
