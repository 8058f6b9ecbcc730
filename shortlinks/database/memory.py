"""In-process implementation of the link store.

Used for local runs without PostgreSQL and by the test suite. Every method
completes without awaiting in between its read and write, so each one is
atomic with respect to other tasks on the event loop.
"""

import itertools
import logging
from typing import Optional, List, Dict
from datetime import datetime
from dataclasses import replace

from .base import LinkStoreBase
from .models import Link
from ..errors import Conflict


class MemoryLinkStore(LinkStoreBase):
    """Dictionary-backed link store keyed by code."""

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._ids = itertools.count(1)
        self._open = False

    async def open(self) -> None:
        self._open = True
        self.logger.debug("Memory store opened")

    async def close(self) -> None:
        self._open = False
        self.logger.debug("Memory store closed")

    async def insert_link(self, code: str, target_url: str, created_at: datetime) -> Link:
        if code in self._links:
            self.logger.warning(f"Code already exists: {code}")
            raise Conflict(f"Code '{code}' already exists")

        link = Link(
            id=next(self._ids),
            code=code,
            target_url=target_url,
            created_at=created_at,
        )
        self._links[code] = link
        return replace(link)

    async def get_link(self, code: str) -> Optional[Link]:
        link = self._links.get(code)
        # Hand out copies so callers never mutate stored rows
        return replace(link) if link else None

    async def code_exists(self, code: str) -> bool:
        return code in self._links

    async def record_click(self, code: str, clicked_at: datetime) -> bool:
        link = self._links.get(code)
        if link is None:
            return False
        link.total_clicks += 1
        link.last_clicked_at = clicked_at
        return True

    async def delete_link(self, code: str) -> bool:
        return self._links.pop(code, None) is not None

    async def list_links(self) -> List[Link]:
        links = sorted(
            self._links.values(),
            key=lambda link: (link.created_at, link.id),
            reverse=True,
        )
        return [replace(link) for link in links]

    async def health_check(self) -> bool:
        return self._open
