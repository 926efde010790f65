"""Redirect resolution: code -> target URL, recording one click."""

import logging
from typing import Optional

from .database.base import LinkStoreBase
from .errors import NotFound


class LinkResolver:
    """Translate short codes into redirect targets while counting visits."""

    def __init__(self, store: LinkStoreBase, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, code: str) -> str:
        """Return the target URL for ``code`` and record exactly one click.

        The lookup and the increment are separate store calls. The increment is
        pinned to the id that was looked up, so if the link is deleted (and the
        code possibly reused) in between, the resolution fails with NotFound
        without counting a click on anything. No retries happen here, so one
        call never counts more than one click.

        Raises:
            NotFound: If the code is unknown
        """
        link = await self.store.get_by_code(code)

        try:
            clicks = await self.store.increment_click(code, link_id=link.id)
        except NotFound:
            self.logger.info(f"Link {code} was deleted during resolution")
            raise

        self.logger.debug(f"Resolved {code} -> {link.url} (clicks={clicks})")
        return link.url
