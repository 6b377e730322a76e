"""Supabase-backed ranking session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from ranking_board.adapters.rows import parse_timestamp
from ranking_board.domain.errors import PersistenceError
from ranking_board.domain.sessions import RankingSession
from ranking_board.services.rankings import SessionRepository

_COLUMNS = (
    "id, slug, title, description, owner_token, card_order, created_at, updated_at"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for ranking sessions."""

    client: Client
    table_name: str = "ranking_sessions"

    def create_session(
        self,
        slug: str,
        title: str,
        description: str | None,
        owner_token: str | None,
    ) -> RankingSession:
        """Create a session row with an empty card order and return it."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "slug": slug,
                    "title": title,
                    "description": description,
                    "owner_token": owner_token,
                    "card_order": [],
                }
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to create session")
        return _parse_session(response.data[0])

    def get_session(self, session_id: UUID) -> RankingSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def get_by_slug(self, slug: str) -> RankingSession | None:
        """Return a session by slug, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def slug_exists(self, slug: str) -> bool:
        """Return True when the slug is already taken."""
        response = (
            self.client.table(self.table_name)
            .select("id")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def list_recent(self, limit: int) -> list[RankingSession]:
        """Return sessions ordered by most recent update."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .order("updated_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_session(row) for row in response.data or []]

    def update_session(
        self, session_id: UUID, changes: dict[str, object]
    ) -> RankingSession | None:
        """Apply field changes to a session and return it."""
        response = (
            self.client.table(self.table_name)
            .update({**changes, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(session_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def update_card_order(
        self, session_id: UUID, card_order: tuple[UUID, ...]
    ) -> RankingSession:
        """Overwrite the whole card order in one row update."""
        response = (
            self.client.table(self.table_name)
            .update(
                {
                    "card_order": [str(card_id) for card_id in card_order],
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(session_id))
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to update card order")
        return _parse_session(response.data[0])

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session row."""
        self.client.table(self.table_name).delete().eq("id", str(session_id)).execute()


def _parse_session(row: dict[str, object]) -> RankingSession:
    """Parse a session row into a domain model."""
    return RankingSession(
        id=UUID(str(row["id"])),
        slug=str(row["slug"]),
        title=str(row.get("title", "")),
        description=row.get("description"),
        owner_token=row.get("owner_token") or None,
        card_order=tuple(UUID(str(item)) for item in row.get("card_order") or []),
        created_at=parse_timestamp(row.get("created_at"), "created_at"),
        updated_at=parse_timestamp(row.get("updated_at"), "updated_at"),
    )
