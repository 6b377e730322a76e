"""Session aggregate service: sessions, their cards and their card order.

This is the only place that writes both a card and its session's ledger in one
logical operation. The store only guarantees single-row atomic writes, so the
operations below order their writes to keep the window of divergence small:

* card creation persists the card, then the reconciled ledger extended by the
  new card, and deletes the fresh card again when the ledger write fails;
* card deletion persists the shortened ledger before deleting the card;
* session deletion removes the cards before the session row.

Anything left over by an interrupted request is absorbed by read-side
reconciliation in :func:`ranking_board.domain.ordering.reconcile`. Every
ledger the service publishes or extends is the reconciled one, so the order a
client is shown is always a valid input to :meth:`RankingService.reorder`.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from ranking_board.domain.cards import Card, CardDraft, CardPatch
from ranking_board.domain.errors import (
    NotFoundError,
    SlugGenerationFailed,
    UnauthorizedError,
)
from ranking_board.domain.ordering import CardOrder, reconcile
from ranking_board.domain.sessions import RankingSession, SessionPatch, SessionView
from ranking_board.domain.slugs import generate_slug, is_valid_slug
from ranking_board.domain.validation import (
    clean_card_draft,
    clean_card_patch,
    clean_description,
    clean_session_patch,
    clean_title,
)
from ranking_board.services.cards import CardService
from ranking_board.services.ownership import authorize

logger = logging.getLogger(__name__)

DEFAULT_SLUG_ATTEMPTS = 5
DEFAULT_RECENT_LIMIT = 20


class SessionRepository(Protocol):
    """Persistence interface for ranking sessions."""

    def create_session(
        self,
        slug: str,
        title: str,
        description: str | None,
        owner_token: str | None,
    ) -> RankingSession:
        """Create a session with an empty card order and return it."""

    def get_session(self, session_id: UUID) -> RankingSession | None:
        """Return a session by id, if present."""

    def get_by_slug(self, slug: str) -> RankingSession | None:
        """Return a session by slug, if present."""

    def slug_exists(self, slug: str) -> bool:
        """Return True when a session already uses the slug."""

    def list_recent(self, limit: int) -> list[RankingSession]:
        """Return sessions ordered by most recent update."""

    def update_session(
        self, session_id: UUID, changes: dict[str, object]
    ) -> RankingSession | None:
        """Apply field changes to a session and return it."""

    def update_card_order(
        self, session_id: UUID, card_order: tuple[UUID, ...]
    ) -> RankingSession:
        """Overwrite the whole card order in a single row write."""

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session row."""


@dataclass
class RankingService:
    """Application service coordinating sessions, cards and card order."""

    session_repository: SessionRepository
    card_service: CardService
    slug_max_attempts: int = DEFAULT_SLUG_ATTEMPTS
    recent_limit: int = DEFAULT_RECENT_LIMIT
    slug_generator: Callable[[str], str] = generate_slug

    def list_recent_sessions(self, limit: int | None = None) -> list[RankingSession]:
        """Return the most recently updated sessions."""
        return self.session_repository.list_recent(limit or self.recent_limit)

    def create_session(
        self,
        title: str,
        description: str | None = None,
        owner_token: str | None = None,
    ) -> RankingSession:
        """Create a session under a freshly generated unique slug."""
        cleaned_title = clean_title(title)
        cleaned_description = clean_description(description)
        slug = self._unique_slug(cleaned_title)
        session = self.session_repository.create_session(
            slug=slug,
            title=cleaned_title,
            description=cleaned_description,
            owner_token=(owner_token or "").strip() or None,
        )
        logger.info(
            "Created ranking session",
            extra={"slug": session.slug, "owned": session.owner_token is not None},
        )
        return session

    def get_session_view(self, slug: str) -> SessionView:
        """Return the session and its cards in ranking order."""
        session = self._resolve_session(slug)
        cards = self._ordered_cards(session)
        return SessionView(session=_with_order(session, cards), cards=cards)

    def update_session(
        self, slug: str, patch: SessionPatch, caller_token: str | None
    ) -> RankingSession:
        """Apply a partial update to the session title or description."""
        cleaned = clean_session_patch(patch)
        session = self._resolve_session(slug)
        self._authorize(session, caller_token)
        changes = cleaned.changes()
        if changes:
            updated = self.session_repository.update_session(session.id, changes)
            if updated is None:
                raise NotFoundError("Session not found")
            session = updated
        return _with_order(session, self._ordered_cards(session))

    def delete_session(self, slug: str, caller_token: str | None) -> None:
        """Delete a session after deleting every card it owns."""
        session = self._resolve_session(slug)
        self._authorize(session, caller_token)
        self.card_service.delete_by_session(session.id)
        self.session_repository.delete_session(session.id)
        logger.info("Deleted ranking session", extra={"slug": session.slug})

    def create_card(
        self, slug: str, draft: CardDraft, caller_token: str | None
    ) -> tuple[Card, CardOrder]:
        """Create a card and append it to the end of the session's order."""
        cleaned = clean_card_draft(draft)
        session = self._resolve_session(slug)
        self._authorize(session, caller_token)
        current = self._current_order(session)
        card = self.card_service.create(session.id, cleaned)
        order = current.append(card.id)
        try:
            updated = self.session_repository.update_card_order(session.id, order.ids)
        except Exception:
            logger.exception(
                "Failed to append card to order",
                extra={"slug": session.slug, "card_id": str(card.id)},
            )
            self._discard_orphan(card)
            raise
        return card, CardOrder(updated.card_order)

    def update_card(
        self, card_id: UUID, patch: CardPatch, caller_token: str | None
    ) -> Card:
        """Apply a partial update to a card owned by an authorized session."""
        cleaned = clean_card_patch(patch)
        card = self.card_service.get(card_id)
        session = self._session_for_card(card)
        self._authorize(session, caller_token)
        return self.card_service.update(card.id, cleaned)

    def delete_card(self, card_id: UUID, caller_token: str | None) -> CardOrder:
        """Remove a card from the order, then delete the card record."""
        card = self.card_service.get(card_id)
        session = self._session_for_card(card)
        self._authorize(session, caller_token)
        order = self._current_order(session).remove(card.id)
        updated = self.session_repository.update_card_order(session.id, order.ids)
        self.card_service.delete(card.id)
        return CardOrder(updated.card_order)

    def reorder(
        self, slug: str, new_order: Sequence[UUID], caller_token: str | None
    ) -> CardOrder:
        """Replace the session's order with a permutation of its cards."""
        session = self._resolve_session(slug)
        self._authorize(session, caller_token)
        replaced = self._current_order(session).replace(new_order)
        updated = self.session_repository.update_card_order(session.id, replaced.ids)
        return CardOrder(updated.card_order)

    def _ordered_cards(self, session: RankingSession) -> list[Card]:
        cards = self.card_service.list_by_session(session.id)
        return reconcile(session.card_order, cards)

    def _current_order(self, session: RankingSession) -> CardOrder:
        return CardOrder(tuple(card.id for card in self._ordered_cards(session)))

    def _unique_slug(self, title: str) -> str:
        for _ in range(self.slug_max_attempts):
            candidate = self.slug_generator(title)
            if not self.session_repository.slug_exists(candidate):
                return candidate
        logger.error(
            "Exhausted slug attempts",
            extra={"attempts": self.slug_max_attempts},
        )
        raise SlugGenerationFailed()

    def _resolve_session(self, slug: str) -> RankingSession:
        if not is_valid_slug(slug):
            raise NotFoundError("Session not found")
        session = self.session_repository.get_by_slug(slug)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def _session_for_card(self, card: Card) -> RankingSession:
        session = self.session_repository.get_session(card.session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def _authorize(self, session: RankingSession, caller_token: str | None) -> None:
        if not authorize(session.owner_token, caller_token):
            logger.info("Rejected mutation", extra={"slug": session.slug})
            raise UnauthorizedError()

    def _discard_orphan(self, card: Card) -> None:
        try:
            self.card_service.delete(card.id)
        except Exception:
            logger.exception(
                "Failed to discard orphaned card", extra={"card_id": str(card.id)}
            )


def _with_order(session: RankingSession, cards: list[Card]) -> RankingSession:
    return replace(session, card_order=tuple(card.id for card in cards))
