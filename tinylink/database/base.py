"""Abstract base class for TinyLink store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    Every data operation is a single atomic call against the backend.
    Backend failures are raised as ``StorageError``.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Store connection string
        """
        self.db_config = db_config

    async def connect(self) -> None:
        """Acquire backend resources. Optional for backends that connect lazily."""

    @abstractmethod
    async def create_link(self, code: str, url: str) -> Optional[Link]:
        """Insert a new link if the code is free.

        Args:
            code: The code to use
            url: The target URL

        Returns:
            The created link, or None if the code already exists
        """
        pass

    @abstractmethod
    async def get_link(self, code: str) -> Optional[Link]:
        """Get the link record for a code.

        Args:
            code: The code to lookup

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_links(self) -> List[Link]:
        """List all links, most recently created first."""
        pass

    @abstractmethod
    async def delete_link(self, code: str) -> bool:
        """Delete a link.

        Args:
            code: The code to delete

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def increment_clicks(self, code: str) -> bool:
        """Add one click and stamp ``last_clicked`` in a single operation.

        Args:
            code: The code that was followed

        Returns:
            True if updated, False if not found
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass
