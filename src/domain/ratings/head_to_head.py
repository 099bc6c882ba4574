"""Face-off summaries between two competitors."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field

from domain.ratings.common import MatchOutcome


@dataclass
class HeadToHeadSummary:
    """Record of every outcome between two competitors, seen from ``competitor_a_id``."""

    competitor_a_id: Hashable
    competitor_b_id: Hashable
    matches_played: int = 0
    a_match_wins: int = 0
    b_match_wins: int = 0
    draws: int = 0
    a_games_won: int = 0
    b_games_won: int = 0
    outcomes: list[MatchOutcome] = field(default_factory=list)

    @property
    def a_match_win_rate(self) -> float | None:
        if self.matches_played == 0:
            return None
        return self.a_match_wins / self.matches_played


def summarize_head_to_head(
    outcomes: Iterable[MatchOutcome],
    competitor_a_id: Hashable,
    competitor_b_id: Hashable,
) -> HeadToHeadSummary:
    """Tally match and game wins between two competitors.

    Outcomes involving anybody else are ignored. Outcomes recorded with the
    two competitors in swapped slots are flipped so every tally is oriented
    from ``competitor_a_id``.
    """
    if competitor_a_id == competitor_b_id:
        raise ValueError(f"head-to-head needs two different competitors (got {competitor_a_id})")

    summary = HeadToHeadSummary(competitor_a_id=competitor_a_id, competitor_b_id=competitor_b_id)
    for outcome in outcomes:
        if outcome.competitor_a_id == competitor_a_id and outcome.competitor_b_id == competitor_b_id:
            a_games, b_games = outcome.score_a, outcome.score_b
        elif outcome.competitor_a_id == competitor_b_id and outcome.competitor_b_id == competitor_a_id:
            a_games, b_games = outcome.score_b, outcome.score_a
        else:
            continue

        summary.matches_played += 1
        summary.a_games_won += a_games
        summary.b_games_won += b_games
        if a_games > b_games:
            summary.a_match_wins += 1
        elif b_games > a_games:
            summary.b_match_wins += 1
        else:
            summary.draws += 1
        summary.outcomes.append(outcome)

    return summary
