"""Data models for the link registry."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class NewLink:
    """A validated link waiting to be inserted. The store assigns id and timestamps."""

    custom_code: str
    title: str
    url: str
    description: Optional[str] = None


@dataclass
class LinkUpdate:
    """Editable fields of a link. ``None`` means leave unchanged."""

    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    clear_description: bool = False

    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.url is None
            and self.description is None
            and not self.clear_description
        )


@dataclass
class Link:
    """Represents a registered link."""

    id: int
    custom_code: str
    title: str
    url: str
    description: Optional[str] = None
    click_count: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def copy(self) -> "Link":
        """Return a detached snapshot of this record."""
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "custom_code": self.custom_code,
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "click_count": self.click_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        """Create from dictionary (database row or ``to_dict`` output)."""
        created_at = data["created_at"]
        updated_at = data.get("updated_at") or created_at
        return cls(
            id=int(data["id"]),
            custom_code=data["custom_code"],
            title=data["title"],
            url=data["url"],
            description=data.get("description"),
            click_count=int(data.get("click_count", 0)),
            created_at=created_at if isinstance(created_at, datetime) else datetime.fromisoformat(created_at),
            updated_at=updated_at if isinstance(updated_at, datetime) else datetime.fromisoformat(updated_at),
        )
