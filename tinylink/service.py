"""Business logic service for the link registry."""

import logging
from typing import Optional, List, Dict, Any

from .shortcode import ShortCodeGenerator
from .resolver import LinkResolver
from .database.base import LinkStoreBase
from .database.models import Link, LinkUpdate, NewLink
from .errors import DuplicateCode, GenerationExhausted, ValidationError
from .common.validators import (
    is_valid_url,
    is_valid_title,
    is_valid_description,
    is_valid_short_code,
    is_reserved_code,
)


class LinkService:
    """Service layer for link registration, resolution and management."""

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        resolver: Optional[LinkResolver] = None,
        logger: Optional[logging.Logger] = None,
        enable_custom_codes: bool = True,
        max_generation_attempts: int = 5,
        custom_code_min_length: int = 3,
        custom_code_max_length: int = 32,
    ):
        """Initialize link service.

        Args:
            store: Link store instance
            short_code_generator: Optional short code generator
            resolver: Optional resolver (built on the store if omitted)
            logger: Optional logger
            enable_custom_codes: Whether to allow caller-supplied short codes
            max_generation_attempts: Generate-and-insert attempts before giving up
            custom_code_min_length: Minimum length of a caller-supplied code
            custom_code_max_length: Maximum length of a caller-supplied code
        """
        if max_generation_attempts < 1:
            raise ValueError("max_generation_attempts must be at least 1")

        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or LinkResolver(store, logger=self.logger)
        self.enable_custom_codes = enable_custom_codes
        self.max_generation_attempts = max_generation_attempts
        self.custom_code_min_length = custom_code_min_length
        self.custom_code_max_length = custom_code_max_length

    async def create_link(
        self,
        title: str,
        url: str,
        description: Optional[str] = None,
        custom_code: Optional[str] = None,
    ) -> Link:
        """Register a new link.

        A caller-supplied code is used verbatim and tried exactly once. Without
        one, random codes are tried until an insert succeeds or the attempt
        budget runs out.

        Args:
            title: Display title
            url: Absolute http(s) target URL
            description: Optional description
            custom_code: Optional caller-chosen short code

        Returns:
            The stored link

        Raises:
            ValidationError: If input is missing or malformed
            DuplicateCode: If the supplied code is already taken
            GenerationExhausted: If no free code was found
        """
        title = self._clean_title(title)
        url = self._clean_url(url)
        description = self._clean_description(description)

        # None and "" both mean "generate one"; anything else is checked as given
        if custom_code:
            if not self.enable_custom_codes:
                raise ValidationError("Custom short codes are not enabled")

            is_valid, error = is_valid_short_code(
                custom_code,
                min_length=self.custom_code_min_length,
                max_length=self.custom_code_max_length,
            )
            if not is_valid:
                raise ValidationError(f"Invalid short code: {error}")

            # Single attempt; a collision goes straight back to the caller
            link = await self.store.create(NewLink(custom_code, title, url, description))
        else:
            link = await self._create_with_generated_code(title, url, description)

        self.logger.info(f"Created link {link.id}: {link.custom_code} -> {link.url}")
        return link

    async def list_links(self) -> List[Link]:
        """List all links, newest first."""
        return await self.store.list()

    async def get_link_by_code(self, code: str) -> Link:
        """Get a link for the stats view. Does not record a click.

        Raises:
            NotFound: If the code is unknown
        """
        return await self.store.get_by_code(code)

    async def get_link_by_id(self, link_id: int) -> Link:
        """Get a link by id.

        Raises:
            NotFound: If the id is unknown
        """
        return await self.store.get_by_id(link_id)

    async def update_link(
        self,
        link_id: int,
        title: Optional[str] = None,
        url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Link:
        """Edit the mutable fields of a link.

        ``None`` leaves a field unchanged; an empty description clears it. The
        short code and click count cannot be edited.

        Raises:
            ValidationError: If a supplied field is invalid or nothing was supplied
            NotFound: If the id is unknown
        """
        changes = LinkUpdate()
        if title is not None:
            changes.title = self._clean_title(title)
        if url is not None:
            changes.url = self._clean_url(url)
        if description is not None:
            cleaned = self._clean_description(description)
            if cleaned is None:
                changes.clear_description = True
            else:
                changes.description = cleaned

        if changes.is_empty():
            raise ValidationError("Nothing to update")

        link = await self.store.update(link_id, changes)
        self.logger.info(f"Updated link {link.id} ({link.custom_code})")
        return link

    async def delete_link(self, link_id: int) -> None:
        """Delete a link. Its short code becomes available immediately.

        Raises:
            NotFound: If the id is unknown
        """
        await self.store.delete(link_id)
        self.logger.info(f"Deleted link {link_id}")

    async def resolve(self, code: str) -> str:
        """Resolve a code for a redirect, recording one click.

        Raises:
            NotFound: If the code is unknown
        """
        return await self.resolver.resolve(code)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics."""
        store_stats = await self.store.get_statistics()

        return {
            **store_stats,
            "custom_codes_enabled": self.enable_custom_codes,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check."""
        store_healthy = await self.store.health_check()

        return {
            "store": store_healthy,
            "overall": store_healthy,
        }

    async def _create_with_generated_code(
        self,
        title: str,
        url: str,
        description: Optional[str],
    ) -> Link:
        for attempt in range(1, self.max_generation_attempts + 1):
            code = self.generator.generate()

            if is_reserved_code(code):
                self.logger.debug(f"Generated reserved code {code}, attempt {attempt}")
                continue

            try:
                return await self.store.create(NewLink(code, title, url, description))
            except DuplicateCode:
                self.logger.debug(f"Collision on generated code {code}, attempt {attempt}")

        self.logger.warning(
            f"No free short code after {self.max_generation_attempts} attempts "
            f"(code space {self.generator.code_space})"
        )
        raise GenerationExhausted(self.max_generation_attempts)

    @staticmethod
    def _clean_title(title: Optional[str]) -> str:
        is_valid, error = is_valid_title(title)
        if not is_valid:
            raise ValidationError(error)
        return title.strip()

    @staticmethod
    def _clean_url(url: Optional[str]) -> str:
        url = url.strip() if isinstance(url, str) else url
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise ValidationError(f"Invalid URL: {error}")
        return url

    @staticmethod
    def _clean_description(description: Optional[str]) -> Optional[str]:
        if description is None:
            return None
        description = description.strip()
        is_valid, error = is_valid_description(description)
        if not is_valid:
            raise ValidationError(error)
        return description or None

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
