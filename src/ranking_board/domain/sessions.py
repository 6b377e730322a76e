"""Domain models for ranking sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from ranking_board.domain.cards import Card
from ranking_board.domain.models import UNSET, Unset


@dataclass(frozen=True)
class RankingSession:
    """Represents a persisted ranking session."""

    id: UUID
    slug: str
    title: str
    description: str | None
    owner_token: str | None
    card_order: tuple[UUID, ...]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SessionPatch:
    """Partial update of a session's editable fields."""

    title: str | Unset = UNSET
    description: str | None | Unset = UNSET

    def changes(self) -> dict[str, object]:
        """Return only the fields that were set."""
        return {
            name: value
            for name, value in (
                ("title", self.title),
                ("description", self.description),
            )
            if value is not UNSET
        }


@dataclass(frozen=True)
class SessionView:
    """A session together with its cards in ranking order."""

    session: RankingSession
    cards: list[Card] = field(default_factory=list)
