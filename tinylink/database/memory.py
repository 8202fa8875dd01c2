"""In-process store for tests and local development."""

import itertools
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from .base import LinkStoreBase
from .models import Link


class InMemoryLinkStore(LinkStoreBase):
    """Dictionary-backed store.

    No method awaits between reading and writing, so each operation runs to
    completion on the event loop without interleaving.
    """

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        # code -> (insertion sequence, link)
        self._links: Dict[str, Tuple[int, Link]] = {}
        self._sequence = itertools.count(1)

    async def create_link(self, code: str, url: str) -> Optional[Link]:
        if code in self._links:
            self.logger.debug(f"Code already exists: {code}")
            return None

        link = Link(code=code, url=url, created_at=datetime.now(timezone.utc))
        self._links[code] = (next(self._sequence), link)
        return _copy(link)

    async def get_link(self, code: str) -> Optional[Link]:
        entry = self._links.get(code)
        return _copy(entry[1]) if entry else None

    async def list_links(self) -> List[Link]:
        entries = sorted(self._links.values(), key=lambda e: e[0], reverse=True)
        return [_copy(link) for _, link in entries]

    async def delete_link(self, code: str) -> bool:
        return self._links.pop(code, None) is not None

    async def increment_clicks(self, code: str) -> bool:
        entry = self._links.get(code)
        if entry is None:
            return False

        link = entry[1]
        link.clicks += 1
        link.last_clicked = datetime.now(timezone.utc)
        return True

    async def close(self) -> None:
        self._links.clear()


def _copy(link: Link) -> Link:
    # Callers never get a handle on the stored record.
    return Link(
        code=link.code,
        url=link.url,
        created_at=link.created_at,
        clicks=link.clicks,
        last_clicked=link.last_clicked,
    )
