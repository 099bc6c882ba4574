"""Ranking domain modules."""

from domain.ratings.common import MatchOutcome

__all__ = ["MatchOutcome"]
