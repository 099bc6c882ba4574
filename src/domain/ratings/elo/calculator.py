"""Head-to-head competitor Elo logic."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from math import floor

from domain.ratings.common import MatchOutcome

SKIP_NO_GAMES = "no_games"
SKIP_NEGATIVE_SCORE = "negative_score"
SKIP_SELF_MATCH = "self_match"


@dataclass(frozen=True)
class EloParameters:
    initial_elo: float = 1000.0
    k_factor: float = 32.0
    scale_factor: float = 400.0


@dataclass(frozen=True)
class CompetitorEloEvent:
    competitor_id: Hashable
    opponent_id: Hashable
    match_id: int | None
    event_time: datetime
    won: bool
    games_won: int
    games_lost: int
    actual_score: float
    expected_score: float
    pre_elo: int
    elo_delta: float
    post_elo: int
    k_factor: float


@dataclass(frozen=True)
class SkippedOutcome:
    """An outcome that was left out of the fold, with the reason why."""

    outcome: MatchOutcome
    reason: str


@dataclass
class RatingRecord:
    competitor_id: Hashable
    rating: int
    display_name: str = ""
    matches_played: int = 0


@dataclass(frozen=True)
class RankedCompetitor:
    position: int
    competitor_id: Hashable
    display_name: str
    rating: int
    matches_played: int


@dataclass
class RatingComputation:
    """Result of one full replay over an ordered outcome list."""

    ratings: dict[Hashable, RatingRecord] = field(default_factory=dict)
    events: list[CompetitorEloEvent] = field(default_factory=list)
    skipped: list[SkippedOutcome] = field(default_factory=list)
    processed_outcomes: int = 0


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(floor(value + 0.5))


def outcome_skip_reason(outcome: MatchOutcome) -> str | None:
    """Return why an outcome cannot be rated, or None when it is usable."""
    if outcome.competitor_a_id == outcome.competitor_b_id:
        return SKIP_SELF_MATCH
    if outcome.score_a < 0 or outcome.score_b < 0:
        return SKIP_NEGATIVE_SCORE
    if outcome.total_games == 0:
        return SKIP_NO_GAMES
    return None


class CompetitorEloCalculator:
    """Stateful outcome-by-outcome competitor Elo calculator.

    Ratings are integers at rest: every update is rounded half-up before it is
    stored, so no fractional part carries over to the next outcome.
    """

    def __init__(self, params: EloParameters) -> None:
        self.params = params
        self._ratings: dict[Hashable, int] = {}
        self._matches_played: dict[Hashable, int] = {}

    def get_rating(self, competitor_id: Hashable) -> int:
        return self._ratings.get(competitor_id, round_half_up(self.params.initial_elo))

    def matches_played(self, competitor_id: Hashable) -> int:
        return self._matches_played.get(competitor_id, 0)

    def tracked_entity_count(self) -> int:
        return len(self._ratings)

    def ratings(self) -> dict[Hashable, int]:
        """Return a snapshot of current competitor ratings."""
        return dict(self._ratings)

    def process_outcome(self, outcome: MatchOutcome) -> tuple[CompetitorEloEvent, CompetitorEloEvent]:
        reason = outcome_skip_reason(outcome)
        if reason is not None:
            raise ValueError(
                f"match_id={outcome.match_id} cannot be rated ({reason}): "
                f"{outcome.competitor_a_id} {outcome.score_a}-{outcome.score_b} {outcome.competitor_b_id}"
            )

        a_pre = self.get_rating(outcome.competitor_a_id)
        b_pre = self.get_rating(outcome.competitor_b_id)

        a_expected = calculate_expected_score(
            rating=a_pre,
            opponent_rating=b_pre,
            scale_factor=self.params.scale_factor,
        )
        b_expected = calculate_expected_score(
            rating=b_pre,
            opponent_rating=a_pre,
            scale_factor=self.params.scale_factor,
        )

        a_actual = outcome.score_a / outcome.total_games
        b_actual = 1.0 - a_actual

        a_delta = self.params.k_factor * (a_actual - a_expected)
        b_delta = self.params.k_factor * (b_actual - b_expected)
        a_post = round_half_up(a_pre + a_delta)
        b_post = round_half_up(b_pre + b_delta)

        self._ratings[outcome.competitor_a_id] = a_post
        self._ratings[outcome.competitor_b_id] = b_post
        self._matches_played[outcome.competitor_a_id] = self.matches_played(outcome.competitor_a_id) + 1
        self._matches_played[outcome.competitor_b_id] = self.matches_played(outcome.competitor_b_id) + 1

        a_event = CompetitorEloEvent(
            competitor_id=outcome.competitor_a_id,
            opponent_id=outcome.competitor_b_id,
            match_id=outcome.match_id,
            event_time=outcome.event_time,
            won=outcome.score_a > outcome.score_b,
            games_won=outcome.score_a,
            games_lost=outcome.score_b,
            actual_score=a_actual,
            expected_score=a_expected,
            pre_elo=a_pre,
            elo_delta=a_delta,
            post_elo=a_post,
            k_factor=self.params.k_factor,
        )
        b_event = CompetitorEloEvent(
            competitor_id=outcome.competitor_b_id,
            opponent_id=outcome.competitor_a_id,
            match_id=outcome.match_id,
            event_time=outcome.event_time,
            won=outcome.score_b > outcome.score_a,
            games_won=outcome.score_b,
            games_lost=outcome.score_a,
            actual_score=b_actual,
            expected_score=b_expected,
            pre_elo=b_pre,
            elo_delta=b_delta,
            post_elo=b_post,
            k_factor=self.params.k_factor,
        )
        return a_event, b_event


def compute_ratings(
    outcomes: Iterable[MatchOutcome],
    params: EloParameters | None = None,
    *,
    category: Hashable | None = None,
    display_names: Mapping[Hashable, str] | None = None,
) -> RatingComputation:
    """Replay ``outcomes`` in the given order and return final ratings.

    The caller owns chronological ordering; outcomes are never re-sorted here.
    When ``category`` is set, outcomes from other categories are ignored.
    Outcomes that cannot be rated are collected in ``skipped`` and leave both
    ratings untouched.
    """
    calculator = CompetitorEloCalculator(params or EloParameters())
    names = display_names or {}
    computation = RatingComputation()

    for outcome in outcomes:
        if category is not None and outcome.category != category:
            continue

        reason = outcome_skip_reason(outcome)
        if reason is not None:
            computation.skipped.append(SkippedOutcome(outcome=outcome, reason=reason))
            continue

        computation.events.extend(calculator.process_outcome(outcome))
        computation.processed_outcomes += 1

    for competitor_id, rating in calculator.ratings().items():
        computation.ratings[competitor_id] = RatingRecord(
            competitor_id=competitor_id,
            rating=rating,
            display_name=names.get(competitor_id) or "",
            matches_played=calculator.matches_played(competitor_id),
        )
    return computation


def rank_ratings(ratings: Mapping[Hashable, RatingRecord]) -> list[RankedCompetitor]:
    """Order records by rating (desc), then display name, then id.

    Ids compare by their own ordering, grouped by type so mixed id types still sort.
    """
    ordered = sorted(
        ratings.values(),
        key=lambda record: (
            -record.rating,
            record.display_name,
            type(record.competitor_id).__name__,
            record.competitor_id,
        ),
    )
    return [
        RankedCompetitor(
            position=position,
            competitor_id=record.competitor_id,
            display_name=record.display_name,
            rating=record.rating,
            matches_played=record.matches_played,
        )
        for position, record in enumerate(ordered, start=1)
    ]

