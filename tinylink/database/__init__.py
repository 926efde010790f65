"""Storage layer for the link registry."""

from .base import LinkStoreBase
from .memory import InMemoryLinkStore
from .postgres import PostgresLinkStore
from .models import Link, LinkUpdate, NewLink

__all__ = [
    "LinkStoreBase",
    "InMemoryLinkStore",
    "PostgresLinkStore",
    "Link",
    "LinkUpdate",
    "NewLink",
]
