#!/usr/bin/env python3
"""
Manually initialize the PostgreSQL schema for TinyLink.

Usage:
    python init_database.py --db-url postgresql://postgres@localhost:5432/tinylink
"""

import argparse
import asyncio
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from tinylink.database import PostgresLinkStore
from tinylink.database.postgres import STORAGE_ERRORS
from tinylink.common.logging_config import setup_logging


async def main():
    parser = argparse.ArgumentParser(description="Initialize TinyLink tables")
    parser.add_argument(
        "--db-url",
        default=os.getenv("TINYLINK_DATABASE_URL", "postgresql://postgres@localhost:5432/tinylink"),
        help="PostgreSQL connection URL"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args()

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")

    store = PostgresLinkStore(
        db_config=args.db_url,
        create_tables=False,
        logger=logger,
    )

    try:
        logger.info("Initializing database tables...")
        await store.ensure_tables()
        logger.info("Tables initialized successfully")

        if not await store.health_check():
            logger.error("Database health check failed")
            return 1
        logger.info("Database health check passed")
        return 0

    except STORAGE_ERRORS as e:
        logger.exception(f"Error initializing tables: {e}")
        return 1

    finally:
        await store.close()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
