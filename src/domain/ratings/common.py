"""Shared types for rating systems."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MatchOutcome:
    """Canonical head-to-head outcome payload used by rating calculators.

    Scores are games (or sets) won inside the match, so a 3-2 series carries
    more information than a plain winner id.
    """

    event_time: datetime
    competitor_a_id: Hashable
    competitor_b_id: Hashable
    score_a: int
    score_b: int
    match_id: int | None = None
    category: Hashable | None = None

    @property
    def total_games(self) -> int:
        return self.score_a + self.score_b


__all__ = ["MatchOutcome"]
