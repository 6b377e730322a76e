"""Domain models for rankable cards."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from ranking_board.domain.models import UNSET, Unset


@dataclass(frozen=True)
class Card:
    """Represents a persisted card belonging to one session."""

    id: UUID
    session_id: UUID
    title: str
    description: str | None
    image_url: str | None
    link_url: str | None
    tags: tuple[str, ...]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CardDraft:
    """Fields of a card about to be created."""

    title: str
    description: str | None = None
    image_url: str | None = None
    link_url: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CardPatch:
    """Partial update of a card; UNSET fields are left untouched."""

    title: str | Unset = UNSET
    description: str | None | Unset = UNSET
    image_url: str | None | Unset = UNSET
    link_url: str | None | Unset = UNSET
    tags: tuple[str, ...] | Unset = UNSET

    def changes(self) -> dict[str, object]:
        """Return only the fields that were set."""
        return {
            name: value
            for name, value in (
                ("title", self.title),
                ("description", self.description),
                ("image_url", self.image_url),
                ("link_url", self.link_url),
                ("tags", self.tags),
            )
            if value is not UNSET
        }

    def is_empty(self) -> bool:
        """Return true when no field was set."""
        return not self.changes()
