"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    CompetitorEloCalculator,
    CompetitorEloEvent,
    EloParameters,
    RankedCompetitor,
    RatingComputation,
    RatingRecord,
    SkippedOutcome,
    calculate_expected_score,
    compute_ratings,
    rank_ratings,
    round_half_up,
)
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_configs

__all__ = [
    "CompetitorEloCalculator",
    "CompetitorEloEvent",
    "EloParameters",
    "EloSystemConfig",
    "RankedCompetitor",
    "RatingComputation",
    "RatingRecord",
    "SkippedOutcome",
    "calculate_expected_score",
    "compute_ratings",
    "load_elo_system_configs",
    "rank_ratings",
    "round_half_up",
]
