"""Data models for TinyLink."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Any, Dict


@dataclass
class Link:
    """Represents a stored link record."""

    code: str
    url: str
    created_at: datetime
    clicks: int = 0
    last_clicked: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return {
            "code": self.code,
            "url": self.url,
            "clicks": self.clicks,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_clicked": self.last_clicked.isoformat() if self.last_clicked else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Link":
        """Create from a dictionary or database row.

        Timestamps may be datetimes (asyncpg rows) or ISO strings (Redis
        hashes); empty strings mean "not set".
        """
        return cls(
            code=data["code"],
            url=data["url"],
            created_at=_parse_timestamp(data["created_at"]),
            clicks=int(data.get("clicks") or 0),
            last_clicked=_parse_timestamp(data.get("last_clicked")),
        )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
