"""Business logic service for TinyLink."""

import logging
from typing import Optional, List

from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase
from .database.models import Link
from .errors import ValidationError, ConflictError, NotFoundError, StorageError
from .common.validators import normalize_url, is_valid_url, is_valid_code, is_reserved


class LinkService:
    """Service layer for link creation, lookup and redirects."""

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
    ):
        """Initialize link service.

        Args:
            store: Link store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Attempts allowed for generated codes
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max(1, max_collision_retries)

    async def create_link(
        self,
        url: Optional[str],
        code: Optional[str] = None,
        serving_host: Optional[str] = None,
    ) -> Link:
        """Create a new link.

        Args:
            url: Target URL as submitted (a bare domain gets https://)
            code: Optional custom code; empty string means "generate one"
            serving_host: Host the request came in on, to refuse self-redirects

        Returns:
            The created link

        Raises:
            ValidationError: If the URL or code is malformed
            ConflictError: If the custom code is taken
            StorageError: If the store fails or no free code was found
        """
        normalized = normalize_url(url)
        if normalized is None:
            raise ValidationError("Invalid URL")

        is_valid, error = is_valid_url(normalized, serving_host)
        if not is_valid:
            self.logger.debug(f"Rejected URL {normalized!r}: {error}")
            raise ValidationError("Invalid URL")

        if code:
            link = await self._create_with_custom_code(code, normalized)
        else:
            link = await self._create_with_generated_code(normalized)

        self.logger.info(f"Created link: {link.code} -> {link.url}")
        return link

    async def _create_with_custom_code(self, code: str, url: str) -> Link:
        is_valid, error = is_valid_code(code)
        if not is_valid:
            raise ValidationError(error)

        link = await self.store.create_link(code, url)
        if link is None:
            raise ConflictError("Code already exists")
        return link

    async def _create_with_generated_code(self, url: str) -> Link:
        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.generate()
            if is_reserved(code):
                continue

            link = await self.store.create_link(code, url)
            if link is not None:
                if attempt > 1:
                    self.logger.debug(f"Allocated code after {attempt} attempts: {code}")
                return link

            self.logger.warning(f"Generated code collided: {code} (attempt {attempt})")

        raise StorageError(
            f"Unable to allocate a unique code after {self.max_collision_retries} attempts"
        )

    async def get_link(self, code: str) -> Link:
        """Get a link by code.

        Raises:
            NotFoundError: If no link exists for the code
        """
        link = await self.store.get_link(code)
        if link is None:
            raise NotFoundError()
        return link

    async def list_links(self) -> List[Link]:
        """List all links, newest first."""
        return await self.store.list_links()

    async def delete_link(self, code: str) -> None:
        """Delete a link.

        Raises:
            NotFoundError: If no link exists for the code
        """
        if not await self.store.delete_link(code):
            raise NotFoundError()
        self.logger.info(f"Deleted link: {code}")

    async def resolve_redirect(self, code: str) -> str:
        """Count a click and return the target URL.

        The increment completes before this returns, so a caller that sends
        the redirect afterwards never reports a click the store lost.

        Raises:
            NotFoundError: If no link exists for the code
        """
        link = await self.store.get_link(code)
        if link is None:
            self.logger.debug(f"Code not found: {code}")
            raise NotFoundError()

        # A concurrent delete can win between the lookup and the update.
        if not await self.store.increment_clicks(code):
            raise NotFoundError()

        return link.url

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
