"""Card endpoints addressed by card id."""

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse

from ranking_board.api.responses import fail, ok, ranking_failure
from ranking_board.api.schemas import UpdateCardRequest, card_payload, order_payload
from ranking_board.domain.errors import RankingError

if TYPE_CHECKING:
    from ranking_board.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


@router.patch("/{card_id}")
async def update_card(
    card_id: UUID,
    body: UpdateCardRequest,
    request: Request,
    x_owner_token: str | None = Header(default=None),
) -> JSONResponse:
    """Apply a partial update to a card."""
    container: AppContainer = request.app.state.container
    try:
        card = container.ranking_service.update_card(
            card_id, body.to_patch(), x_owner_token
        )
    except RankingError as exc:
        return ranking_failure(exc, "UPDATE_ERROR", "Failed to update card")
    except Exception:
        logger.exception("Failed to update card", extra={"card_id": str(card_id)})
        return fail("Failed to update card", "UPDATE_ERROR", 500)
    return ok({"card": card_payload(card)})


@router.delete("/{card_id}")
async def delete_card(
    card_id: UUID,
    request: Request,
    x_owner_token: str | None = Header(default=None),
) -> JSONResponse:
    """Delete a card after removing it from its session's order."""
    container: AppContainer = request.app.state.container
    try:
        order = container.ranking_service.delete_card(card_id, x_owner_token)
    except RankingError as exc:
        return ranking_failure(exc, "DELETE_ERROR", "Failed to delete card")
    except Exception:
        logger.exception("Failed to delete card", extra={"card_id": str(card_id)})
        return fail("Failed to delete card", "DELETE_ERROR", 500)
    return ok(
        {"message": "Card deleted successfully", "cardOrder": order_payload(order)}
    )
