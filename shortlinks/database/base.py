"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import datetime

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    A store is opened once at process start and closed at shutdown; the
    handle is shared by every request in between.
    """

    def __init__(self, db_config: str):
        """Initialize store handle.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def open(self) -> None:
        """Acquire connections and make sure the schema exists."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass

    @abstractmethod
    async def insert_link(self, code: str, target_url: str, created_at: datetime) -> Link:
        """Insert a new link with zeroed counters.

        Args:
            code: The short code to use
            target_url: The destination URL
            created_at: Creation timestamp

        Returns:
            The stored link, including its assigned id

        Raises:
            Conflict: If the code is already taken
        """
        pass

    @abstractmethod
    async def get_link(self, code: str) -> Optional[Link]:
        """Get the link for a code (exact, case-sensitive match).

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def code_exists(self, code: str) -> bool:
        """Check if a code is already taken."""
        pass

    @abstractmethod
    async def record_click(self, code: str, clicked_at: datetime) -> bool:
        """Atomically increment total_clicks and set last_clicked_at.

        Returns:
            True if a link was updated, False if the code is unknown
        """
        pass

    @abstractmethod
    async def delete_link(self, code: str) -> bool:
        """Delete a link.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def list_links(self) -> List[Link]:
        """List all links, newest first."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        pass
