"""Data models for short links."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass
class Link:
    """Represents a short link row in the store."""

    id: int
    code: str
    target_url: str
    created_at: datetime
    total_clicks: int = 0
    last_clicked_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "code": self.code,
            "target_url": self.target_url,
            "total_clicks": self.total_clicks,
            "last_clicked_at": self.last_clicked_at.isoformat() if self.last_clicked_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Link":
        """Create from a database row or mapping."""
        return cls(
            id=row["id"],
            code=row["code"],
            target_url=row["target_url"],
            created_at=row["created_at"],
            total_clicks=row["total_clicks"] or 0,
            last_clicked_at=row["last_clicked_at"],
        )
