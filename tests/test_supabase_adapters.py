"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from ranking_board.adapters.supabase_card_repository import SupabaseCardRepository
from ranking_board.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from ranking_board.domain.cards import CardDraft
from ranking_board.domain.errors import PersistenceError

_TIMESTAMP = "2024-05-01T12:00:00.123456+00:00"


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    executed: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.executed.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _session_row(**overrides) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "slug": "best-movies-x7k2p1",
        "title": "Best Movies",
        "description": None,
        "owner_token": None,
        "card_order": [],
        "created_at": _TIMESTAMP,
        "updated_at": _TIMESTAMP,
    }
    row.update(overrides)
    return row


def _card_row(session_id: str, **overrides) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "session_id": session_id,
        "title": "Movie A",
        "description": None,
        "image_url": None,
        "link_url": None,
        "tags": ["drama"],
        "created_at": _TIMESTAMP,
        "updated_at": _TIMESTAMP,
    }
    row.update(overrides)
    return row


def test_session_repository_create_and_parse() -> None:
    client = FakeSupabaseClient()
    table = client.table("ranking_sessions")
    table.queue("insert", [_session_row(owner_token="secret")])

    repository = SupabaseSessionRepository(client)
    session = repository.create_session(
        slug="best-movies-x7k2p1",
        title="Best Movies",
        description=None,
        owner_token="secret",
    )

    assert table.last_payload["card_order"] == []
    assert table.last_payload["owner_token"] == "secret"
    assert session.slug == "best-movies-x7k2p1"
    assert session.owner_token == "secret"
    assert session.card_order == ()
    assert session.created_at.year == 2024


def test_session_repository_create_without_row_raises() -> None:
    repository = SupabaseSessionRepository(FakeSupabaseClient())

    with pytest.raises(PersistenceError):
        repository.create_session("slug-abc123", "Title", None, None)


def test_session_repository_lookup_by_slug() -> None:
    client = FakeSupabaseClient()
    table = client.table("ranking_sessions")
    first, second = uuid4(), uuid4()
    table.queue("select", [_session_row(card_order=[str(first), str(second)])])

    repository = SupabaseSessionRepository(client)
    session = repository.get_by_slug("best-movies-x7k2p1")
    missing = repository.get_by_slug("other-abc123")

    assert session is not None
    assert session.card_order == (first, second)
    assert missing is None
    assert ("slug", "best-movies-x7k2p1") in table.last_filters


def test_session_repository_slug_exists() -> None:
    client = FakeSupabaseClient()
    client.table("ranking_sessions").queue("select", [{"id": str(uuid4())}])

    repository = SupabaseSessionRepository(client)

    assert repository.slug_exists("taken-abc123") is True
    assert repository.slug_exists("free-abc123") is False


def test_session_repository_list_recent_orders_by_update() -> None:
    client = FakeSupabaseClient()
    table = client.table("ranking_sessions")
    table.queue("select", [_session_row(), _session_row(slug="other-abc123")])

    sessions = SupabaseSessionRepository(client).list_recent(20)

    assert [session.slug for session in sessions] == [
        "best-movies-x7k2p1",
        "other-abc123",
    ]
    assert table.last_order == ("updated_at", True)


def test_session_repository_writes_whole_card_order() -> None:
    client = FakeSupabaseClient()
    table = client.table("ranking_sessions")
    session_id = uuid4()
    first, second = uuid4(), uuid4()
    table.queue(
        "update",
        [_session_row(id=str(session_id), card_order=[str(second), str(first)])],
    )

    repository = SupabaseSessionRepository(client)
    session = repository.update_card_order(session_id, (second, first))

    assert table.last_payload["card_order"] == [str(second), str(first)]
    assert "updated_at" in table.last_payload
    assert ("id", str(session_id)) in table.last_filters
    assert session.card_order == (second, first)


def test_session_repository_card_order_write_without_row_raises() -> None:
    repository = SupabaseSessionRepository(FakeSupabaseClient())

    with pytest.raises(PersistenceError):
        repository.update_card_order(uuid4(), ())


def test_session_repository_uses_configured_table() -> None:
    client = FakeSupabaseClient()

    SupabaseSessionRepository(client, table_name="boards").delete_session(uuid4())

    assert client.tables["boards"].executed == ["delete"]


def test_card_repository_create_sends_tags_as_list() -> None:
    client = FakeSupabaseClient()
    table = client.table("cards")
    session_id = uuid4()
    table.queue("insert", [_card_row(str(session_id), tags=["drama", "classic"])])

    card = SupabaseCardRepository(client).create_card(
        session_id, CardDraft(title="Movie A", tags=("drama", "classic"))
    )

    assert table.last_payload["session_id"] == str(session_id)
    assert table.last_payload["tags"] == ["drama", "classic"]
    assert card.tags == ("drama", "classic")
    assert card.session_id == session_id


def test_card_repository_update_returns_none_when_missing() -> None:
    client = FakeSupabaseClient()
    table = client.table("cards")

    updated = SupabaseCardRepository(client).update_card(
        uuid4(), {"title": "B", "tags": ("x",)}
    )

    assert updated is None
    assert table.last_payload["tags"] == ["x"]
    assert "updated_at" in table.last_payload


def test_card_repository_lists_and_deletes_by_session() -> None:
    client = FakeSupabaseClient()
    table = client.table("cards")
    session_id = str(uuid4())
    table.queue("select", [_card_row(session_id), _card_row(session_id)])

    repository = SupabaseCardRepository(client)
    cards = repository.list_cards(uuid4())
    repository.delete_cards_for_session(uuid4())

    assert len(cards) == 2
    assert table.executed == ["select", "delete"]
    assert table.last_filters[-1][0] == "session_id"


def test_session_rows_parse_identically_on_repeat_reads() -> None:
    client = FakeSupabaseClient()
    table = client.table("ranking_sessions")
    row = _session_row()
    table.queue("select", [row])
    table.queue("select", [row])

    repository = SupabaseSessionRepository(client)

    assert repository.get_by_slug("best-movies-x7k2p1") == repository.get_by_slug(
        "best-movies-x7k2p1"
    )


def test_session_row_without_timestamp_raises() -> None:
    client = FakeSupabaseClient()
    client.table("ranking_sessions").queue("select", [_session_row(updated_at=None)])

    repository = SupabaseSessionRepository(client)

    with pytest.raises(PersistenceError, match="updated_at"):
        repository.get_by_slug("best-movies-x7k2p1")


def test_card_row_with_invalid_timestamp_raises() -> None:
    client = FakeSupabaseClient()
    client.table("cards").queue("select", [_card_row(str(uuid4()), created_at="soon")])

    repository = SupabaseCardRepository(client)

    with pytest.raises(PersistenceError, match="created_at"):
        repository.list_cards(uuid4())
