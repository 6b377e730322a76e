"""ASGI entrypoint for the ranking board API."""

from ranking_board.api.app import create_app
from ranking_board.containers import build_container

app = create_app(build_container())
