"""Short code allocation for new links."""

import logging
from datetime import datetime, timezone
from typing import Optional

from .database.base import LinkStoreBase
from .database.models import Link
from .common.validators import is_valid_url, is_valid_short_code
from .errors import InvalidInput, Conflict, ExhaustedRetries
from .shortcode import ShortCodeGenerator, Exhausted, find_free_code


class CodeAllocator:
    """Validate or generate a short code and write the new link."""

    def __init__(
        self,
        store: LinkStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize code allocator.

        Args:
            store: Link store handle
            generator: Optional random code generator
            max_attempts: Candidates tried before giving up on a random code
            logger: Optional logger
        """
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def allocate(self, target_url: str, custom_code: Optional[str] = None) -> Link:
        """Create a new link for ``target_url``.

        Args:
            target_url: The destination URL
            custom_code: Optional caller-chosen code; empty means generate one

        Returns:
            The stored link with id and timestamps

        Raises:
            InvalidInput: Malformed URL or custom code
            Conflict: Custom code already taken
            ExhaustedRetries: Every generated code collided
        """
        is_valid, error = is_valid_url(target_url)
        if not is_valid:
            raise InvalidInput(error)

        if custom_code:
            is_valid, error = is_valid_short_code(custom_code)
            if not is_valid:
                raise InvalidInput(error)

            if await self.store.code_exists(custom_code):
                raise Conflict("Custom code already exists")

            code = custom_code
        else:
            result = await find_free_code(self.generator, self.store.code_exists, self.max_attempts)
            if isinstance(result, Exhausted):
                self.logger.error(f"No free code after {result.attempts} attempts for {target_url}")
                raise ExhaustedRetries("Failed to generate unique code")
            code = result.code

        link = await self.store.insert_link(code, target_url, datetime.now(timezone.utc))

        self.logger.info(f"Created link {link.code} -> {link.target_url}")
        return link
