"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from itertools import count
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from ranking_board.api.app import create_app
from ranking_board.config import Settings
from ranking_board.containers import AppContainer
from ranking_board.domain.cards import Card, CardDraft
from ranking_board.domain.errors import PersistenceError
from ranking_board.domain.sessions import RankingSession
from ranking_board.services.cards import CardRepository, CardService
from ranking_board.services.rankings import RankingService, SessionRepository

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)
_TICKS = count()


def _tick() -> datetime:
    """Return a strictly increasing timestamp."""
    return _EPOCH + timedelta(seconds=next(_TICKS))


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[UUID, RankingSession] = field(default_factory=dict)
    order_writes: int = 0

    def create_session(
        self,
        slug: str,
        title: str,
        description: str | None,
        owner_token: str | None,
    ) -> RankingSession:
        now = _tick()
        session = RankingSession(
            id=uuid4(),
            slug=slug,
            title=title,
            description=description,
            owner_token=owner_token,
            card_order=(),
            created_at=now,
            updated_at=now,
        )
        self.sessions[session.id] = session
        return session

    def get_session(self, session_id: UUID) -> RankingSession | None:
        return self.sessions.get(session_id)

    def get_by_slug(self, slug: str) -> RankingSession | None:
        for session in self.sessions.values():
            if session.slug == slug:
                return session
        return None

    def slug_exists(self, slug: str) -> bool:
        return self.get_by_slug(slug) is not None

    def list_recent(self, limit: int) -> list[RankingSession]:
        ordered = sorted(
            self.sessions.values(), key=lambda item: item.updated_at, reverse=True
        )
        return ordered[:limit]

    def update_session(
        self, session_id: UUID, changes: dict[str, object]
    ) -> RankingSession | None:
        session = self.sessions.get(session_id)
        if session is None:
            return None
        updated = replace(session, **changes, updated_at=_tick())
        self.sessions[session_id] = updated
        return updated

    def update_card_order(
        self, session_id: UUID, card_order: tuple[UUID, ...]
    ) -> RankingSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise PersistenceError("Failed to update card order")
        self.order_writes += 1
        updated = replace(session, card_order=tuple(card_order), updated_at=_tick())
        self.sessions[session_id] = updated
        return updated

    def delete_session(self, session_id: UUID) -> None:
        self.sessions.pop(session_id, None)


@dataclass
class InMemoryCardRepository(CardRepository):
    """In-memory card repository for tests."""

    cards: dict[UUID, Card] = field(default_factory=dict)

    def create_card(self, session_id: UUID, draft: CardDraft) -> Card:
        now = _tick()
        card = Card(
            id=uuid4(),
            session_id=session_id,
            title=draft.title,
            description=draft.description,
            image_url=draft.image_url,
            link_url=draft.link_url,
            tags=tuple(draft.tags),
            created_at=now,
            updated_at=now,
        )
        self.cards[card.id] = card
        return card

    def get_card(self, card_id: UUID) -> Card | None:
        return self.cards.get(card_id)

    def update_card(self, card_id: UUID, changes: dict[str, object]) -> Card | None:
        card = self.cards.get(card_id)
        if card is None:
            return None
        updated = replace(card, **changes, updated_at=_tick())
        self.cards[card_id] = updated
        return updated

    def delete_card(self, card_id: UUID) -> None:
        self.cards.pop(card_id, None)

    def list_cards(self, session_id: UUID) -> list[Card]:
        return [card for card in self.cards.values() if card.session_id == session_id]

    def delete_cards_for_session(self, session_id: UUID) -> None:
        for card_id in [
            card.id for card in self.cards.values() if card.session_id == session_id
        ]:
            self.cards.pop(card_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJlLWZvci10ZXN0cw"
        ),
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def card_repository() -> InMemoryCardRepository:
    return InMemoryCardRepository()


@pytest.fixture
def card_service(card_repository: InMemoryCardRepository) -> CardService:
    return CardService(card_repository)


@pytest.fixture
def ranking_service(
    session_repository: InMemorySessionRepository, card_service: CardService
) -> RankingService:
    return RankingService(
        session_repository=session_repository,
        card_service=card_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    card_service: CardService,
    ranking_service: RankingService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        card_service=card_service,
        ranking_service=ranking_service,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
