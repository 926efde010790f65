#!/usr/bin/env python3
"""
Command-line interface for the TinyLink registry.

Talks to the PostgreSQL store directly, so it works while the web service is
down and sees the same data the service does.

Usage:
    python tinylink_cli.py create <title> <url> [--description TEXT] [--custom-code CODE]
    python tinylink_cli.py list
    python tinylink_cli.py get <code>
    python tinylink_cli.py resolve <code>
    python tinylink_cli.py delete <id>
    python tinylink_cli.py stats
    python tinylink_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from tinylink.database import PostgresLinkStore
from tinylink.errors import LinkError
from tinylink.service import LinkService
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging


class TinyLinkCLI:
    """Command-line interface for TinyLink."""

    def __init__(self, db_url: str, verbose: bool = False):
        """Initialize CLI."""
        self.db_url = db_url
        self.verbose = verbose
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = None
        self.service = None

    def initialize(self):
        """Create store and service."""
        self.store = PostgresLinkStore(
            db_config=self.db_url,
            logger=self.logger,
        )
        self.service = LinkService(
            store=self.store,
            short_code_generator=ShortCodeGenerator(default_length=6),
            logger=self.logger,
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    @staticmethod
    def _emit(payload: dict, error: bool = False) -> int:
        print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)
        return 1 if error else 0

    async def run(self, coro) -> int:
        """Await a command, mapping link errors to a JSON error and exit code 1."""
        try:
            return self._emit({"success": True, **(await coro)})
        except LinkError as e:
            return self._emit({"success": False, "error": e.message}, error=True)

    async def create(self, title: str, url: str, description: Optional[str], custom_code: Optional[str]) -> dict:
        link = await self.service.create_link(title, url, description=description, custom_code=custom_code)
        return {"link": link.to_dict(), "message": f"Created short code: {link.custom_code}"}

    async def list_links(self) -> dict:
        links = await self.service.list_links()
        return {"count": len(links), "links": [link.to_dict() for link in links]}

    async def get(self, code: str) -> dict:
        link = await self.service.get_link_by_code(code)
        return {"link": link.to_dict()}

    async def resolve(self, code: str) -> dict:
        """Resolve like a visitor would. Counts one click."""
        url = await self.service.resolve(code)
        return {"code": code, "url": url}

    async def delete(self, link_id: int) -> dict:
        await self.service.delete_link(link_id)
        return {"id": link_id, "message": f"Deleted link {link_id}"}

    async def stats(self) -> dict:
        return {"statistics": await self.service.get_statistics()}

    async def health(self) -> dict:
        health_status = await self.service.health_check()
        if not health_status["overall"]:
            raise LinkError("Store is unhealthy")
        return {"health": health_status}


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="TinyLink CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Register a link with a generated code
  %(prog)s create "Docs" https://example.com/long/url

  # Register with a custom code
  %(prog)s create "Repo" https://github.com/user/repo --custom-code myrepo

  # Show stats for a code
  %(prog)s get myrepo

  # Delete by id
  %(prog)s delete 12
        """
    )

    parser.add_argument(
        "--db-url",
        default=os.getenv("TINYLINK_DATABASE_URL", "postgresql://postgres@localhost:5432/tinylink"),
        help="PostgreSQL connection URL (default: from TINYLINK_DATABASE_URL env)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    create_parser = subparsers.add_parser("create", help="Register a link")
    create_parser.add_argument("title", help="Display title")
    create_parser.add_argument("url", help="Target URL")
    create_parser.add_argument("--description", help="Optional description")
    create_parser.add_argument("--custom-code", help="Custom short code")

    subparsers.add_parser("list", help="List links, newest first")

    get_parser = subparsers.add_parser("get", help="Show a link and its click count")
    get_parser.add_argument("code", help="Short code to lookup")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a code (counts a click)")
    resolve_parser.add_argument("code", help="Short code to resolve")

    delete_parser = subparsers.add_parser("delete", help="Delete a link")
    delete_parser.add_argument("id", type=int, help="Link id")

    subparsers.add_parser("stats", help="Show totals")
    subparsers.add_parser("health", help="Check store health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    cli = TinyLinkCLI(db_url=args.db_url, verbose=args.verbose)
    cli.initialize()

    commands = {
        "create": lambda: cli.create(args.title, args.url, args.description, args.custom_code),
        "list": cli.list_links,
        "get": lambda: cli.get(args.code),
        "resolve": lambda: cli.resolve(args.code),
        "delete": lambda: cli.delete(args.id),
        "stats": cli.stats,
        "health": cli.health,
    }

    try:
        return await cli.run(commands[args.command]())
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
