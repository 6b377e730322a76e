"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ranking_board.api.cards import router as cards_router
from ranking_board.api.responses import fail
from ranking_board.api.sessions import router as sessions_router
from ranking_board.app_logging import configure_logging
from ranking_board.containers import AppContainer

_VALUE_ERROR_PREFIX = "Value error, "


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Ranking Board API")
    app.state.container = container

    app.include_router(sessions_router)
    app.include_router(cards_router)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render malformed requests in the standard error envelope."""
        errors = exc.errors()
        logger.info(
            "Rejected malformed request",
            extra={"path": request.url.path, "errors": len(errors)},
        )
        if any(tuple(error.get("loc", ()))[:1] == ("path",) for error in errors):
            return fail("Invalid card ID", "INVALID_ID", status.HTTP_400_BAD_REQUEST)
        return fail(
            _first_error_message(errors),
            "VALIDATION_ERROR",
            status.HTTP_400_BAD_REQUEST,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _first_error_message(errors: list[dict[str, object]]) -> str:
    """Return a caller-facing message for the first validation error."""
    if not errors:
        return "Invalid input"
    message = str(errors[0].get("msg") or "Invalid input")
    return message.removeprefix(_VALUE_ERROR_PREFIX)
