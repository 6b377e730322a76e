"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from ranking_board.adapters.supabase_card_repository import SupabaseCardRepository
from ranking_board.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from ranking_board.config import Settings
from ranking_board.services.cards import CardService
from ranking_board.services.rankings import RankingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    card_service: CardService
    ranking_service: RankingService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(
        supabase_client, table_name=resolved_settings.sessions_table
    )
    card_repository = SupabaseCardRepository(
        supabase_client, table_name=resolved_settings.cards_table
    )
    card_service = CardService(card_repository)
    ranking_service = RankingService(
        session_repository=session_repository,
        card_service=card_service,
        slug_max_attempts=resolved_settings.slug_max_attempts,
        recent_limit=resolved_settings.recent_sessions_limit,
    )

    return AppContainer(
        settings=resolved_settings,
        card_service=card_service,
        ranking_service=ranking_service,
    )
