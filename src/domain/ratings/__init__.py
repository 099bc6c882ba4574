"""Rating-system domain modules."""

from domain.ratings.common import MatchOutcome
from domain.ratings.head_to_head import HeadToHeadSummary, summarize_head_to_head

__all__ = [
    "HeadToHeadSummary",
    "MatchOutcome",
    "summarize_head_to_head",
]
