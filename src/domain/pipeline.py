"""Ranking pipeline: ordered match history in, ranked competitors out."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from domain.ratings.common import MatchOutcome
from domain.ratings.elo.calculator import (
    CompetitorEloEvent,
    EloParameters,
    RankedCompetitor,
    SkippedOutcome,
    compute_ratings,
    rank_ratings,
)
from domain.ratings.head_to_head import HeadToHeadSummary, summarize_head_to_head
from repositories.ratings.common import fetch_match_outcomes, fetch_outcomes_between
from repositories.repository import (
    fetch_display_names,
    fetch_game_type_by_urlpath,
    fetch_game_types,
    fetch_matches_for_player,
    fetch_player_by_urlpath,
)


@dataclass(frozen=True)
class RankingSummary:
    """Ranked ratings for one game type."""

    game_type_id: int
    game_type_name: str
    system_name: str
    processed_outcomes: int
    skipped: list[SkippedOutcome]
    ranks: list[RankedCompetitor]
    events: list[CompetitorEloEvent]


@dataclass(frozen=True)
class FaceOffSummary:
    player1_name: str
    player2_name: str
    head_to_head: HeadToHeadSummary


@dataclass(frozen=True)
class GameTypeMatches:
    game_type_id: int
    game_type_name: str
    outcomes: list[MatchOutcome]


@dataclass(frozen=True)
class PlayerHistory:
    """One player's matches grouped by game type, newest first inside each group."""

    player_id: int
    player_name: str
    groups: list[GameTypeMatches]
    display_names: dict[int, str]


def rank_game_type(
    *,
    session_factory,
    game_type_urlpath: str,
    params: EloParameters,
    system_name: str = "elo_default",
    include_hidden: bool = False,
    echo: Callable[[str], None] | None = None,
) -> RankingSummary:
    """Replay one game type's full match history and rank every player in it."""
    with session_factory() as session:
        game_type = fetch_game_type_by_urlpath(session, game_type_urlpath)
        if game_type is None:
            raise LookupError(f"No game type with urlpath '{game_type_urlpath}'")

        outcomes = fetch_match_outcomes(session, game_type.id, include_hidden=include_hidden)
        display_names = fetch_display_names(session)
        game_type_id = int(game_type.id)
        game_type_name = game_type.name

    computation = compute_ratings(outcomes, params, display_names=display_names)
    ranks = rank_ratings(computation.ratings)

    if echo is not None:
        for skipped in computation.skipped:
            outcome = skipped.outcome
            echo(
                f"skipped match_id={outcome.match_id} reason={skipped.reason} "
                f"player1={outcome.competitor_a_id} player2={outcome.competitor_b_id} "
                f"score={outcome.score_a}-{outcome.score_b}"
            )
        unresolved = sum(1 for rank in ranks if not rank.display_name)
        echo(
            "ranked "
            f"game_type={game_type_urlpath} "
            f"system={system_name} "
            f"fetched_outcomes={len(outcomes)} "
            f"processed_outcomes={computation.processed_outcomes} "
            f"skipped_outcomes={len(computation.skipped)} "
            f"ranked_players={len(ranks)} "
            f"unresolved_names={unresolved}"
        )

    return RankingSummary(
        game_type_id=game_type_id,
        game_type_name=game_type_name,
        system_name=system_name,
        processed_outcomes=computation.processed_outcomes,
        skipped=computation.skipped,
        ranks=ranks,
        events=computation.events,
    )


def face_off(
    *,
    session_factory,
    player1_urlpath: str,
    player2_urlpath: str,
    game_type_urlpath: str | None = None,
    include_hidden: bool = False,
) -> FaceOffSummary:
    """Summarize every match two players have played against each other."""
    with session_factory() as session:
        player1 = fetch_player_by_urlpath(session, player1_urlpath)
        if player1 is None:
            raise LookupError(f"No player with urlpath '{player1_urlpath}'")
        player2 = fetch_player_by_urlpath(session, player2_urlpath)
        if player2 is None:
            raise LookupError(f"No player with urlpath '{player2_urlpath}'")

        game_type_id = None
        if game_type_urlpath is not None:
            game_type = fetch_game_type_by_urlpath(session, game_type_urlpath)
            if game_type is None:
                raise LookupError(f"No game type with urlpath '{game_type_urlpath}'")
            game_type_id = int(game_type.id)

        outcomes = fetch_outcomes_between(
            session,
            player1.id,
            player2.id,
            game_type_id=game_type_id,
            include_hidden=include_hidden,
        )
        player1_name = player1.nickname
        player2_name = player2.nickname
        player1_id = int(player1.id)
        player2_id = int(player2.id)

    return FaceOffSummary(
        player1_name=player1_name,
        player2_name=player2_name,
        head_to_head=summarize_head_to_head(outcomes, player1_id, player2_id),
    )


def player_history(
    *,
    session_factory,
    player_urlpath: str,
    include_hidden: bool = False,
) -> PlayerHistory:
    """Collect a player's matches, grouped by game type in the order they first appear."""
    with session_factory() as session:
        player = fetch_player_by_urlpath(session, player_urlpath)
        if player is None:
            raise LookupError(f"No player with urlpath '{player_urlpath}'")

        matches = fetch_matches_for_player(session, player.id, include_hidden=include_hidden)
        game_type_names = {int(row.id): row.name for row in fetch_game_types(session)}
        display_names = fetch_display_names(session)
        player_id = int(player.id)
        player_name = player.nickname
        outcomes = [
            MatchOutcome(
                match_id=int(match.id),
                category=int(match.game_type_id),
                event_time=match.date,
                competitor_a_id=int(match.player1_id),
                competitor_b_id=int(match.player2_id),
                score_a=int(match.player1_score),
                score_b=int(match.player2_score),
            )
            for match in matches
        ]

    groups: dict[int, GameTypeMatches] = {}
    for outcome in outcomes:
        game_type_id = outcome.category
        if game_type_id not in groups:
            groups[game_type_id] = GameTypeMatches(
                game_type_id=game_type_id,
                game_type_name=game_type_names.get(game_type_id, ""),
                outcomes=[],
            )
        groups[game_type_id].outcomes.append(outcome)

    return PlayerHistory(
        player_id=player_id,
        player_name=player_name,
        groups=list(groups.values()),
        display_names=display_names,
    )
