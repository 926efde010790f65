"""In-process link store.

Used for tests, local development and single-worker deployments. No method
awaits between checking state and changing it, so on one event loop every
create, update, delete and increment is atomic without locks. Adding a
suspension point inside a mutation would break that; the store is also not
safe to share across threads or processes.
"""

import itertools
import logging
from typing import Optional, List, Dict, Any

from .base import LinkStoreBase
from .models import Link, LinkUpdate, NewLink, utcnow
from ..errors import DuplicateCode, NotFound


class InMemoryLinkStore(LinkStoreBase):
    """Link store kept in process memory."""

    backend_name = "memory"

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__("memory://")
        self.logger = logger or logging.getLogger(__name__)

        self._by_code: Dict[str, Link] = {}
        self._by_id: Dict[int, Link] = {}
        self._ids = itertools.count(1)
        self._closed = False

    async def create(self, link: NewLink) -> Link:
        if link.custom_code in self._by_code:
            self.logger.debug(f"Short code already exists: {link.custom_code}")
            raise DuplicateCode(link.custom_code)

        now = utcnow()
        record = Link(
            id=next(self._ids),
            custom_code=link.custom_code,
            title=link.title,
            url=link.url,
            description=link.description,
            click_count=0,
            created_at=now,
            updated_at=now,
        )
        self._by_code[record.custom_code] = record
        self._by_id[record.id] = record

        self.logger.debug(f"Stored link {record.id}: {record.custom_code} -> {record.url}")
        return record.copy()

    async def get_by_code(self, code: str) -> Link:
        record = self._by_code.get(code)
        if record is None:
            raise NotFound(f"Short code '{code}' not found")
        return record.copy()

    async def get_by_id(self, link_id: int) -> Link:
        record = self._by_id.get(link_id)
        if record is None:
            raise NotFound(f"Link {link_id} not found")
        return record.copy()

    async def list(self) -> List[Link]:
        links = [record.copy() for record in self._by_id.values()]
        links.sort(key=lambda l: (l.created_at, l.id), reverse=True)
        return links

    async def update(self, link_id: int, changes: LinkUpdate) -> Link:
        record = self._by_id.get(link_id)
        if record is None:
            raise NotFound(f"Link {link_id} not found")

        if changes.title is not None:
            record.title = changes.title
        if changes.url is not None:
            record.url = changes.url
        if changes.clear_description:
            record.description = None
        elif changes.description is not None:
            record.description = changes.description
        record.updated_at = utcnow()
        return record.copy()

    async def delete(self, link_id: int) -> None:
        record = self._by_id.pop(link_id, None)
        if record is None:
            raise NotFound(f"Link {link_id} not found")
        del self._by_code[record.custom_code]

        self.logger.debug(f"Removed link {link_id} ({record.custom_code})")

    async def increment_click(self, code: str, link_id: Optional[int] = None) -> int:
        record = self._by_code.get(code)
        if record is None or (link_id is not None and record.id != link_id):
            raise NotFound(f"Short code '{code}' not found")

        record.click_count += 1
        return record.click_count

    async def get_statistics(self) -> Dict[str, Any]:
        records = list(self._by_id.values())
        return {
            "total_links": len(records),
            "total_clicks": sum(r.click_count for r in records),
            "backend": self.backend_name,
        }

    async def health_check(self) -> bool:
        return not self._closed

    async def close(self) -> None:
        self._closed = True
