"""Session endpoints: listing, lifecycle, cards and card order."""

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse

from ranking_board.api.responses import fail, ok, ranking_failure
from ranking_board.api.schemas import (
    CreateCardRequest,
    CreateSessionRequest,
    UpdateOrderRequest,
    UpdateSessionRequest,
    card_payload,
    order_payload,
    session_payload,
)
from ranking_board.domain.errors import RankingError

if TYPE_CHECKING:
    from ranking_board.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _container(request: Request) -> "AppContainer":
    return request.app.state.container


@router.get("")
async def list_sessions(
    request: Request, x_owner_token: str | None = Header(default=None)
) -> JSONResponse:
    """Return the most recently updated sessions."""
    try:
        sessions = _container(request).ranking_service.list_recent_sessions()
    except Exception:
        logger.exception("Failed to fetch sessions")
        return fail("Failed to fetch sessions", "FETCH_ERROR", 500)
    return ok(
        {"sessions": [session_payload(item, x_owner_token) for item in sessions]}
    )


@router.post("")
async def create_session(
    body: CreateSessionRequest,
    request: Request,
    x_owner_token: str | None = Header(default=None),
) -> JSONResponse:
    """Create a session owned by the caller's token, if one is given."""
    try:
        session = _container(request).ranking_service.create_session(
            title=body.title,
            description=body.description,
            owner_token=x_owner_token,
        )
    except RankingError as exc:
        return ranking_failure(exc, "CREATE_ERROR", "Failed to create session")
    except Exception:
        logger.exception("Failed to create session")
        return fail("Failed to create session", "CREATE_ERROR", 500)
    return ok(
        {"session": session_payload(session, x_owner_token)},
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{slug}")
async def get_session(
    slug: str, request: Request, x_owner_token: str | None = Header(default=None)
) -> JSONResponse:
    """Return a session with its cards in ranking order."""
    try:
        view = _container(request).ranking_service.get_session_view(slug)
    except RankingError as exc:
        return ranking_failure(exc, "FETCH_ERROR", "Failed to fetch session")
    except Exception:
        logger.exception("Failed to fetch session", extra={"slug": slug})
        return fail("Failed to fetch session", "FETCH_ERROR", 500)
    return ok(
        {
            "session": session_payload(view.session, x_owner_token),
            "cards": [card_payload(card) for card in view.cards],
        }
    )


@router.patch("/{slug}")
async def update_session(
    slug: str,
    body: UpdateSessionRequest,
    request: Request,
    x_owner_token: str | None = Header(default=None),
) -> JSONResponse:
    """Update the session title or description."""
    try:
        session = _container(request).ranking_service.update_session(
            slug, body.to_patch(), x_owner_token
        )
    except RankingError as exc:
        return ranking_failure(exc, "UPDATE_ERROR", "Failed to update session")
    except Exception:
        logger.exception("Failed to update session", extra={"slug": slug})
        return fail("Failed to update session", "UPDATE_ERROR", 500)
    return ok({"session": session_payload(session, x_owner_token)})


@router.delete("/{slug}")
async def delete_session(
    slug: str, request: Request, x_owner_token: str | None = Header(default=None)
) -> JSONResponse:
    """Delete a session together with all of its cards."""
    try:
        _container(request).ranking_service.delete_session(slug, x_owner_token)
    except RankingError as exc:
        return ranking_failure(exc, "DELETE_ERROR", "Failed to delete session")
    except Exception:
        logger.exception("Failed to delete session", extra={"slug": slug})
        return fail("Failed to delete session", "DELETE_ERROR", 500)
    return ok({"message": "Session deleted successfully"})


@router.post("/{slug}/cards")
async def create_card(
    slug: str,
    body: CreateCardRequest,
    request: Request,
    x_owner_token: str | None = Header(default=None),
) -> JSONResponse:
    """Create a card at the end of the session's order."""
    try:
        card, order = _container(request).ranking_service.create_card(
            slug, body.to_draft(), x_owner_token
        )
    except RankingError as exc:
        return ranking_failure(exc, "CREATE_ERROR", "Failed to create card")
    except Exception:
        logger.exception("Failed to create card", extra={"slug": slug})
        return fail("Failed to create card", "CREATE_ERROR", 500)
    return ok(
        {"card": card_payload(card), "cardOrder": order_payload(order)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{slug}/order")
async def update_order(
    slug: str,
    body: UpdateOrderRequest,
    request: Request,
    x_owner_token: str | None = Header(default=None),
) -> JSONResponse:
    """Replace the session's card order with a full permutation."""
    try:
        order = _container(request).ranking_service.reorder(
            slug, body.card_order, x_owner_token
        )
    except RankingError as exc:
        return ranking_failure(exc, "UPDATE_ERROR", "Failed to update order")
    except Exception:
        logger.exception("Failed to update card order", extra={"slug": slug})
        return fail("Failed to update order", "UPDATE_ERROR", 500)
    return ok({"cardOrder": order_payload(order)})
