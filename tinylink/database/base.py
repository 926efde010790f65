"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any

from .models import Link, LinkUpdate, NewLink


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    The store is the only authority on code uniqueness. Implementations must
    make "code unused" + "insert" a single atomic step and must serialize
    click increments per record.
    """

    backend_name = "base"

    def __init__(self, db_config: str = ""):
        """Initialize store.

        Args:
            db_config: Database connection string (unused by in-process stores)
        """
        self.db_config = db_config

    @abstractmethod
    async def create(self, link: NewLink) -> Link:
        """Insert a new link.

        Args:
            link: Validated link fields including its short code

        Returns:
            The stored link with id, counters and timestamps assigned

        Raises:
            DuplicateCode: If a live link already uses the code
        """
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Link:
        """Get the link registered under a short code.

        Raises:
            NotFound: If no live link uses the code
        """
        pass

    @abstractmethod
    async def get_by_id(self, link_id: int) -> Link:
        """Get a link by id.

        Raises:
            NotFound: If the id is unknown or deleted
        """
        pass

    @abstractmethod
    async def list(self) -> List[Link]:
        """List links, newest first (ties broken by id, highest first)."""
        pass

    @abstractmethod
    async def update(self, link_id: int, changes: LinkUpdate) -> Link:
        """Apply edits to title, url or description and refresh ``updated_at``.

        Raises:
            NotFound: If the id is unknown or deleted
        """
        pass

    @abstractmethod
    async def delete(self, link_id: int) -> None:
        """Delete a link and free its short code.

        Raises:
            NotFound: If the id is unknown or already deleted
        """
        pass

    @abstractmethod
    async def increment_click(self, code: str, link_id: Optional[int] = None) -> int:
        """Atomically add one click to the link under ``code``.

        Args:
            code: Short code of the link
            link_id: If given, only count the click when the code still
                belongs to this link (guards against delete-and-recreate)

        Returns:
            The click count after the increment

        Raises:
            NotFound: If no live link uses the code
        """
        pass

    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Get store statistics.

        Returns:
            Dictionary with total_links, total_clicks and backend
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""
        pass
