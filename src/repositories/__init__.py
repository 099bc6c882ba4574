"""Database repository helpers."""

from repositories.ratings.common import fetch_match_outcomes, fetch_outcomes_between
from repositories.repository import (
    add_game_type,
    add_match,
    add_player,
    ensure_schema,
    fetch_display_names,
    fetch_game_type_by_urlpath,
    fetch_game_types,
    fetch_matches_for_player,
    fetch_player_by_urlpath,
    merge_players,
    set_match_hidden,
    slugify,
    update_match,
)

__all__ = [
    "add_game_type",
    "add_match",
    "add_player",
    "ensure_schema",
    "fetch_display_names",
    "fetch_game_type_by_urlpath",
    "fetch_game_types",
    "fetch_match_outcomes",
    "fetch_matches_for_player",
    "fetch_outcomes_between",
    "fetch_player_by_urlpath",
    "merge_players",
    "set_match_hidden",
    "slugify",
    "update_match",
]
