"""Card store: CRUD over cards scoped to a session."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from ranking_board.domain.cards import Card, CardDraft, CardPatch
from ranking_board.domain.errors import NotFoundError
from ranking_board.domain.validation import clean_card_draft, clean_card_patch


class CardRepository(Protocol):
    """Persistence interface for cards."""

    def create_card(self, session_id: UUID, draft: CardDraft) -> Card:
        """Create a card row and return it."""

    def get_card(self, card_id: UUID) -> Card | None:
        """Return a card by id, if present."""

    def update_card(self, card_id: UUID, changes: dict[str, object]) -> Card | None:
        """Apply the given field changes and return the updated card."""

    def delete_card(self, card_id: UUID) -> None:
        """Delete a card row."""

    def list_cards(self, session_id: UUID) -> list[Card]:
        """Return every card of a session, in no particular order."""

    def delete_cards_for_session(self, session_id: UUID) -> None:
        """Delete every card of a session."""


@dataclass
class CardService:
    """Application service for single-card persistence.

    The service never touches a session's card order; callers that create or
    delete cards are responsible for keeping the ledger in step.
    """

    repository: CardRepository

    def create(self, session_id: UUID, draft: CardDraft) -> Card:
        """Validate and persist a new card."""
        return self.repository.create_card(session_id, clean_card_draft(draft))

    def get(self, card_id: UUID) -> Card:
        """Return a card or raise NotFoundError."""
        card = self.repository.get_card(card_id)
        if card is None:
            raise NotFoundError("Card not found")
        return card

    def update(self, card_id: UUID, patch: CardPatch) -> Card:
        """Apply a partial update; fields absent from the patch are kept."""
        cleaned = clean_card_patch(patch)
        if cleaned.is_empty():
            return self.get(card_id)
        updated = self.repository.update_card(card_id, cleaned.changes())
        if updated is None:
            raise NotFoundError("Card not found")
        return updated

    def delete(self, card_id: UUID) -> None:
        """Delete a card record."""
        self.repository.delete_card(card_id)

    def list_by_session(self, session_id: UUID) -> list[Card]:
        """Return the cards of a session without any ordering guarantee."""
        return self.repository.list_cards(session_id)

    def delete_by_session(self, session_id: UUID) -> None:
        """Delete every card of a session."""
        self.repository.delete_cards_for_session(session_id)
