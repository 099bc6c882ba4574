"""Chronological match-outcome queries feeding the rating calculators."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from domain.ratings.common import MatchOutcome
from models import Match


def _outcome_statement(conditions: list[Any], include_hidden: bool):
    if not include_hidden:
        conditions = [*conditions, Match.hidden.is_(False)]
    return (
        select(
            Match.id.label("match_id"),
            Match.game_type_id,
            Match.date.label("event_time"),
            Match.player1_id,
            Match.player2_id,
            Match.player1_score,
            Match.player2_score,
        )
        .where(*conditions)
        .order_by(Match.date, Match.id)
    )


def _rows_to_outcomes(rows) -> list[MatchOutcome]:
    outcomes: list[MatchOutcome] = []
    for row in rows:
        event_time = row["event_time"]
        if not isinstance(event_time, datetime):
            raise ValueError(f"match_id={row['match_id']} has invalid event_time={event_time!r}")

        outcomes.append(
            MatchOutcome(
                match_id=int(row["match_id"]),
                category=int(row["game_type_id"]),
                event_time=event_time,
                competitor_a_id=int(row["player1_id"]),
                competitor_b_id=int(row["player2_id"]),
                score_a=int(row["player1_score"]),
                score_b=int(row["player2_score"]),
            )
        )
    return outcomes


def fetch_match_outcomes(
    session: Session,
    game_type_id: int,
    *,
    include_hidden: bool = False,
) -> list[MatchOutcome]:
    """Fetch one game type's match outcomes in deterministic chronological order."""
    statement = _outcome_statement([Match.game_type_id == game_type_id], include_hidden)
    rows = session.execute(statement).mappings().all()
    return _rows_to_outcomes(rows)


def fetch_outcomes_between(
    session: Session,
    player_a_id: int,
    player_b_id: int,
    *,
    game_type_id: int | None = None,
    include_hidden: bool = False,
) -> list[MatchOutcome]:
    """Fetch every outcome between two players, oldest first."""
    conditions: list[Any] = [
        or_(
            and_(Match.player1_id == player_a_id, Match.player2_id == player_b_id),
            and_(Match.player1_id == player_b_id, Match.player2_id == player_a_id),
        )
    ]
    if game_type_id is not None:
        conditions.append(Match.game_type_id == game_type_id)
    statement = _outcome_statement(conditions, include_hidden)
    rows = session.execute(statement).mappings().all()
    return _rows_to_outcomes(rows)
