"""Field constraints for sessions and cards.

Every ``clean_*`` helper returns the normalized value (surrounding whitespace
stripped, empty optional strings turned into ``None``) or raises
:class:`ValidationError` with a caller-facing message.
"""

from dataclasses import replace

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ranking_board.domain.cards import CardDraft, CardPatch
from ranking_board.domain.errors import ValidationError
from ranking_board.domain.models import UNSET
from ranking_board.domain.sessions import SessionPatch

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
MAX_TAGS = 20
TAG_MAX_LENGTH = 50

_URL_ADAPTER = TypeAdapter(AnyUrl)


def clean_title(value: str | None) -> str:
    """Return a trimmed, non-empty title."""
    title = (value or "").strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError("Title is too long")
    return title


def clean_description(value: str | None) -> str | None:
    """Return a trimmed description, or None when blank."""
    if value is None:
        return None
    description = value.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError("Description is too long")
    return description or None


def clean_url(value: str | None) -> str | None:
    """Return a well-formed URL, or None when blank."""
    if value is None:
        return None
    url = value.strip()
    if not url:
        return None
    try:
        _URL_ADAPTER.validate_python(url)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid URL") from exc
    return url


def clean_tags(values: list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    """Return trimmed tags with blanks and duplicates dropped."""
    values = values or ()
    if len(values) > MAX_TAGS:
        raise ValidationError("Too many tags")
    tags: list[str] = []
    for value in values:
        tag = value.strip()
        if len(tag) > TAG_MAX_LENGTH:
            raise ValidationError("Tag is too long")
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def clean_card_draft(draft: CardDraft) -> CardDraft:
    """Validate every field of a new card."""
    return CardDraft(
        title=clean_title(draft.title),
        description=clean_description(draft.description),
        image_url=clean_url(draft.image_url),
        link_url=clean_url(draft.link_url),
        tags=clean_tags(draft.tags),
    )


def clean_card_patch(patch: CardPatch) -> CardPatch:
    """Validate only the fields present in a card patch."""
    cleaned = patch
    if patch.title is not UNSET:
        cleaned = replace(cleaned, title=clean_title(patch.title))
    if patch.description is not UNSET:
        cleaned = replace(cleaned, description=clean_description(patch.description))
    if patch.image_url is not UNSET:
        cleaned = replace(cleaned, image_url=clean_url(patch.image_url))
    if patch.link_url is not UNSET:
        cleaned = replace(cleaned, link_url=clean_url(patch.link_url))
    if patch.tags is not UNSET:
        cleaned = replace(cleaned, tags=clean_tags(patch.tags))
    return cleaned


def clean_session_patch(patch: SessionPatch) -> SessionPatch:
    """Validate only the fields present in a session patch."""
    cleaned = patch
    if patch.title is not UNSET:
        cleaned = replace(cleaned, title=clean_title(patch.title))
    if patch.description is not UNSET:
        cleaned = replace(cleaned, description=clean_description(patch.description))
    return cleaned
