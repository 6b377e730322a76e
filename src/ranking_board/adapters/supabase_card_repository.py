"""Supabase-backed card repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from ranking_board.adapters.rows import parse_timestamp
from ranking_board.domain.cards import Card, CardDraft
from ranking_board.domain.errors import PersistenceError
from ranking_board.services.cards import CardRepository

_COLUMNS = (
    "id, session_id, title, description, image_url, link_url, tags, "
    "created_at, updated_at"
)


@dataclass
class SupabaseCardRepository(CardRepository):
    """Supabase implementation for card persistence."""

    client: Client
    table_name: str = "cards"

    def create_card(self, session_id: UUID, draft: CardDraft) -> Card:
        """Create a card row and return it."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "session_id": str(session_id),
                    "title": draft.title,
                    "description": draft.description,
                    "image_url": draft.image_url,
                    "link_url": draft.link_url,
                    "tags": list(draft.tags),
                }
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to create card")
        return _parse_card(response.data[0])

    def get_card(self, card_id: UUID) -> Card | None:
        """Return a card by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(card_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_card(response.data[0])

    def update_card(self, card_id: UUID, changes: dict[str, object]) -> Card | None:
        """Apply field changes to a card and return it."""
        payload = dict(changes)
        if "tags" in payload:
            payload["tags"] = list(payload["tags"])
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table(self.table_name)
            .update(payload)
            .eq("id", str(card_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_card(response.data[0])

    def delete_card(self, card_id: UUID) -> None:
        """Delete a card row."""
        self.client.table(self.table_name).delete().eq("id", str(card_id)).execute()

    def list_cards(self, session_id: UUID) -> list[Card]:
        """Return every card of a session."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("session_id", str(session_id))
            .execute()
        )
        return [_parse_card(row) for row in response.data or []]

    def delete_cards_for_session(self, session_id: UUID) -> None:
        """Delete every card of a session."""
        self.client.table(self.table_name).delete().eq(
            "session_id", str(session_id)
        ).execute()


def _parse_card(row: dict[str, object]) -> Card:
    """Parse a card row into a domain model."""
    return Card(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        title=str(row.get("title", "")),
        description=row.get("description"),
        image_url=row.get("image_url"),
        link_url=row.get("link_url"),
        tags=tuple(row.get("tags") or []),
        created_at=parse_timestamp(row.get("created_at"), "created_at"),
        updated_at=parse_timestamp(row.get("updated_at"), "updated_at"),
    )
