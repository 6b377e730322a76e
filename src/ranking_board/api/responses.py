"""Response envelope helpers: ``{ok, data}`` or ``{ok, error}``."""

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from ranking_board.domain.errors import PersistenceError, RankingError

logger = logging.getLogger(__name__)


def ok(
    data: dict[str, object], status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    """Return a success envelope."""
    return JSONResponse({"ok": True, "data": data}, status_code=status_code)


def fail(message: str, code: str, status_code: int) -> JSONResponse:
    """Return an error envelope."""
    return JSONResponse(
        {"ok": False, "error": {"message": message, "code": code}},
        status_code=status_code,
    )


def ranking_failure(
    exc: RankingError, fallback_code: str, fallback_message: str
) -> JSONResponse:
    """Translate a domain error into an error envelope.

    Storage failures are logged and reported with the endpoint's fallback code
    so that no internal detail reaches the caller.
    """
    if isinstance(exc, PersistenceError):
        logger.error("Storage failure: %s", exc.message)
        return fail(fallback_message, fallback_code, exc.status_code)
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s: %s", exc.code, exc.message)
    return fail(exc.message, exc.code, exc.status_code)
