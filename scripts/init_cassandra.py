#!/usr/bin/env python3
"""
Cassandra Schema Initialization Script
Creates the keyspace and wide-row tables used by the driver.
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

from cassandra.cluster import Cluster
from dotenv import load_dotenv

from widerow.config import CassandraConfig
from widerow.schema import create_column_family, drop_column_family

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def get_cassandra_session(
    hosts: List[str],
    port: int = 9042,
    max_retries: int = 5,
    retry_delay: int = 5
):
    """
    Create a Cassandra session with retry logic.

    Args:
        hosts: List of Cassandra host addresses
        port: Cassandra native port
        max_retries: Maximum connection attempts
        retry_delay: Delay between retries in seconds

    Returns:
        Tuple of (session, cluster)
    """
    for attempt in range(1, max_retries + 1):
        try:
            logger.info(f"Connecting to Cassandra (attempt {attempt}/{max_retries})...")
            cluster = Cluster(hosts, port=port)
            session = cluster.connect()
            logger.info("Connected to Cassandra successfully!")
            return session, cluster
        except Exception as e:
            logger.warning(f"Connection failed: {e}")
            if attempt < max_retries:
                logger.info(f"Retrying in {retry_delay} seconds...")
                time.sleep(retry_delay)
            else:
                logger.error("Max retries reached. Exiting.")
                raise


def init_cassandra(
    tables: List[str],
    config: Optional[CassandraConfig] = None,
    drop_existing: bool = False
) -> None:
    """
    Initialize the keyspace and wide-row tables.

    Args:
        tables: Column family tables to create
        config: Cassandra configuration (default from env)
        drop_existing: Drop the tables before creating them
    """
    config = config or CassandraConfig()

    logger.info(f"Cassandra hosts: {config.hosts}")
    logger.info(f"Keyspace: {config.keyspace}")

    session, cluster = get_cassandra_session(config.hosts, port=config.port)

    try:
        for table in tables:
            if drop_existing:
                drop_column_family(session, table, config.keyspace)
            create_column_family(
                session,
                table,
                keyspace=config.keyspace,
                replication_factor=config.replication_factor
            )

        logger.info("=" * 50)
        logger.info("Cassandra initialization complete!")
        logger.info("=" * 50)

        # Verify tables
        result = session.execute(
            "SELECT table_name FROM system_schema.tables WHERE keyspace_name = %s",
            (config.keyspace,)
        )
        existing = [row.table_name for row in result]
        logger.info(f"Tables in {config.keyspace}: {', '.join(existing)}")

    finally:
        cluster.shutdown()


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize Cassandra schema for wide row column families"
    )
    parser.add_argument(
        "tables",
        nargs="+",
        help="Wide-row tables to create"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Cassandra host address (default: CASSANDRA_HOSTS)"
    )
    parser.add_argument(
        "--keyspace",
        default=None,
        help="Keyspace name (default: CASSANDRA_KEYSPACE)"
    )
    parser.add_argument(
        "--replication-factor",
        type=int,
        default=None,
        help="Replication factor for a new keyspace"
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating (DANGER!)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = CassandraConfig()
    if args.host:
        config.hosts = [args.host]
    if args.keyspace:
        config.keyspace = args.keyspace
    if args.replication_factor:
        config.replication_factor = args.replication_factor

    try:
        init_cassandra(args.tables, config=config, drop_existing=args.drop)
        return 0
    except Exception as e:
        logger.error(f"Initialization failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
