"""Pydantic request models and response payload builders."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ranking_board.domain.cards import Card, CardDraft, CardPatch
from ranking_board.domain.ordering import CardOrder
from ranking_board.domain.sessions import RankingSession, SessionPatch
from ranking_board.services.ownership import can_edit


class _RequestModel(BaseModel):
    """Base for JSON bodies using camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateSessionRequest(_RequestModel):
    """Body of a session creation request."""

    title: str = ""
    description: str | None = None


class UpdateSessionRequest(_RequestModel):
    """Body of a session update; omitted fields are left untouched."""

    title: str | None = None
    description: str | None = None

    def to_patch(self) -> SessionPatch:
        return SessionPatch(
            **{name: getattr(self, name) for name in self.model_fields_set}
        )


class CreateCardRequest(_RequestModel):
    """Body of a card creation request."""

    title: str = ""
    description: str | None = None
    image_url: str | None = None
    link_url: str | None = None
    tags: list[str] | None = None

    def to_draft(self) -> CardDraft:
        return CardDraft(
            title=self.title,
            description=self.description,
            image_url=self.image_url,
            link_url=self.link_url,
            tags=tuple(self.tags or ()),
        )


class UpdateCardRequest(_RequestModel):
    """Body of a card update; omitted fields are left untouched."""

    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    link_url: str | None = None
    tags: list[str] | None = None

    def to_patch(self) -> CardPatch:
        changes: dict[str, object] = {
            name: getattr(self, name) for name in self.model_fields_set
        }
        if "tags" in changes:
            changes["tags"] = tuple(changes["tags"] or ())
        return CardPatch(**changes)


class UpdateOrderRequest(_RequestModel):
    """Body of a reorder request: the complete target order."""

    card_order: list[UUID]

    @field_validator("card_order", mode="before")
    @classmethod
    def _parse_card_ids(cls, value: object) -> list[UUID]:
        if not isinstance(value, list):
            raise ValueError("Card order must be a list")
        try:
            return [UUID(str(item)) for item in value]
        except ValueError as exc:
            raise ValueError("Invalid card ID") from exc


def session_payload(
    session: RankingSession, caller_token: str | None
) -> dict[str, object]:
    """Serialize a session without exposing its owner token."""
    return {
        "id": str(session.id),
        "slug": session.slug,
        "title": session.title,
        "description": session.description,
        "cardOrder": order_payload(session.card_order),
        "owned": session.owner_token is not None,
        "canEdit": can_edit(session, caller_token),
        "createdAt": session.created_at.isoformat(),
        "updatedAt": session.updated_at.isoformat(),
    }


def card_payload(card: Card) -> dict[str, object]:
    """Serialize a card."""
    return {
        "id": str(card.id),
        "sessionId": str(card.session_id),
        "title": card.title,
        "description": card.description,
        "imageUrl": card.image_url,
        "linkUrl": card.link_url,
        "tags": list(card.tags),
        "createdAt": card.created_at.isoformat(),
        "updatedAt": card.updated_at.isoformat(),
    }


def order_payload(order: CardOrder | tuple[UUID, ...]) -> list[str]:
    """Serialize a card order as a list of id strings."""
    return [str(card_id) for card_id in order]
