"""Error taxonomy for ranking operations.

Each error carries the wire code and HTTP status it is rendered with at the
API boundary. Messages are safe to show to callers.
"""


class RankingError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RankingError):
    """Raised when input is malformed or out of range."""

    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Invalid input"


class InvalidIdError(RankingError):
    """Raised when an identifier does not match the store's id format."""

    code = "INVALID_ID"
    status_code = 400
    default_message = "Invalid card ID"


class NotFoundError(RankingError):
    """Raised when a session or card does not exist."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Not found"


class UnauthorizedError(RankingError):
    """Raised when the caller token does not match the session owner."""

    code = "UNAUTHORIZED"
    status_code = 403
    default_message = "Unauthorized"


class OrderCardinalityMismatch(RankingError):
    """Raised when a new order does not hold the same number of cards."""

    code = "INVALID_ORDER"
    status_code = 400
    default_message = "Card order mismatch"


class UnknownCardInOrder(RankingError):
    """Raised when a new order references a card outside the session."""

    code = "INVALID_CARD_ID"
    status_code = 400
    default_message = "Invalid card ID in order"


class SlugGenerationFailed(RankingError):
    """Raised when every slug candidate collided with an existing session."""

    code = "SLUG_GENERATION_ERROR"
    status_code = 500
    default_message = "Failed to generate unique slug"


class PersistenceError(RankingError):
    """Raised when the underlying store rejects or loses a write."""

    code = "PERSISTENCE_ERROR"
    status_code = 500
    default_message = "Storage failure"
