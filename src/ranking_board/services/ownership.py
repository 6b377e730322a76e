"""Capability-token ownership checks."""

import secrets

from ranking_board.domain.sessions import RankingSession


def authorize(resource_owner_token: str | None, caller_token: str | None) -> bool:
    """Return True when the caller may mutate a resource with this owner token.

    Unowned resources accept any caller. Owned resources accept only the exact
    token they were created with.
    """
    if not resource_owner_token:
        return True
    if not caller_token:
        return False
    return secrets.compare_digest(
        resource_owner_token.encode("utf-8"), caller_token.encode("utf-8")
    )


def can_edit(session: RankingSession, caller_token: str | None) -> bool:
    """Return True when the caller may mutate the session and its cards."""
    return authorize(session.owner_token, caller_token)
