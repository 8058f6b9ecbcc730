"""Redirect resolution for short codes."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .database.base import LinkStoreBase
from .errors import NotFound


class RedirectResolver:
    """Look up a code, count the click, hand back the target URL.

    The click update runs after the lookup and is best-effort: if it fails
    the error is logged and the redirect is still served.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock

    async def resolve(self, code: str) -> str:
        """Return the target URL for ``code`` and record one click.

        Raises:
            NotFound: If no link has this code
        """
        link = await self.store.get_link(code)
        if link is None:
            self.logger.warning(f"Short code not found: {code}")
            raise NotFound()

        try:
            await self.store.record_click(code, self.clock())
        except Exception:
            self.logger.exception(f"Failed to record click for {code}")

        self.logger.debug(f"Resolved {code} -> {link.target_url}")
        return link.target_url
