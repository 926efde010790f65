#!/usr/bin/env python3
"""
Seed sample links into the TinyLink database.

Usage:
    python seed_data.py --db-url postgresql://postgres@localhost:5432/tinylink --count 10
"""

import argparse
import asyncio
import sys
import os
import random

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from tinylink.database import PostgresLinkStore
from tinylink.errors import LinkError
from tinylink.service import LinkService
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging


# (title, url) pairs for sample links
SAMPLE_LINKS = [
    ("CPython", "https://github.com/python/cpython"),
    ("asyncio docs", "https://docs.python.org/3/library/asyncio.html"),
    ("FastAPI", "https://fastapi.tiangolo.com/"),
    ("PostgreSQL docs", "https://www.postgresql.org/docs/"),
    ("asyncpg", "https://magicstack.github.io/asyncpg/current/"),
    ("Python questions", "https://stackoverflow.com/questions/tagged/python"),
    ("Hacker News", "https://news.ycombinator.com/"),
    ("r/programming", "https://www.reddit.com/r/programming/"),
]


async def main():
    parser = argparse.ArgumentParser(description="Seed sample links")
    parser.add_argument(
        "--db-url",
        default=os.getenv("TINYLINK_DATABASE_URL", "postgresql://postgres@localhost:5432/tinylink"),
        help="PostgreSQL connection URL"
    )
    parser.add_argument("--count", type=int, default=10, help="Number of links to create")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args()

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")

    store = PostgresLinkStore(db_config=args.db_url, create_tables=True, logger=logger)
    service = LinkService(
        store=store,
        short_code_generator=ShortCodeGenerator(default_length=6),
        logger=logger,
    )

    try:
        logger.info(f"Creating {args.count} sample links...")

        created = 0
        for i in range(args.count):
            title, url = random.choice(SAMPLE_LINKS)

            try:
                link = await service.create_link(
                    title=f"{title} #{i}",
                    url=f"{url}?seed={i}",
                    description="Seeded sample link",
                )
                logger.info(f"Created: {link.custom_code} -> {link.url}")
                created += 1
            except LinkError as e:
                logger.warning(f"Failed to create link {i}: {e.message}")

        logger.info(f"Successfully created {created} links")

        stats = await service.get_statistics()
        logger.info(f"Total links in database: {stats['total_links']}")
        return 0

    finally:
        await service.close()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
