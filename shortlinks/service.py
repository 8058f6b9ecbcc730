"""Service layer tying the store, allocator and resolver together."""

import logging
from typing import Optional, List, Dict

from .allocator import CodeAllocator
from .resolver import RedirectResolver
from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase
from .database.models import Link
from .errors import NotFound


class LinkService:
    """Service layer for short link operations."""

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_allocation_attempts: int = 10,
    ):
        """Initialize link service.

        Args:
            store: Opened link store handle
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_allocation_attempts: Maximum random codes tried per creation
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.allocator = CodeAllocator(
            store,
            generator=short_code_generator,
            max_attempts=max_allocation_attempts,
            logger=self.logger,
        )
        self.resolver = RedirectResolver(store, logger=self.logger)

    async def create_link(self, target_url: str, custom_code: Optional[str] = None) -> Link:
        """Create a new link, see ``CodeAllocator.allocate``."""
        return await self.allocator.allocate(target_url, custom_code)

    async def resolve(self, code: str) -> str:
        """Resolve a code to its target URL, counting the click."""
        return await self.resolver.resolve(code)

    async def get_link(self, code: str) -> Link:
        """Get a link by code.

        Raises:
            NotFound: If the code is unknown
        """
        link = await self.store.get_link(code)
        if link is None:
            raise NotFound()
        self.logger.debug(f"Retrieved link {code}")
        return link

    async def list_links(self) -> List[Link]:
        """List all links, newest first."""
        return await self.store.list_links()

    async def delete_link(self, code: str) -> None:
        """Delete a link by code.

        Raises:
            NotFound: If the code is unknown
        """
        if not await self.store.delete_link(code):
            raise NotFound()
        self.logger.info(f"Deleted link {code}")

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close the store."""
        await self.store.close()
