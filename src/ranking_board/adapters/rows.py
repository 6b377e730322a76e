"""Helpers shared by the Supabase row parsers."""

from datetime import datetime

from ranking_board.domain.errors import PersistenceError


def parse_timestamp(raw: object, column: str) -> datetime:
    """Parse a timestamptz column, rejecting rows that lack it."""
    if not isinstance(raw, str) or not raw:
        raise PersistenceError(f"Row is missing {column}")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise PersistenceError(f"Row has an invalid {column}") from exc
