"""Tests for turning rating records into an ordered ranking table."""

from __future__ import annotations

from datetime import datetime

from domain.ratings.common import MatchOutcome
from domain.ratings.elo.calculator import RatingRecord, compute_ratings, rank_ratings


def test_rank_orders_by_rating_descending() -> None:
    ranks = rank_ratings(
        {
            1: RatingRecord(competitor_id=1, rating=987, display_name="Leffen"),
            2: RatingRecord(competitor_id=2, rating=1042, display_name="Armada"),
            3: RatingRecord(competitor_id=3, rating=1010, display_name="PPMD"),
        }
    )

    assert [rank.competitor_id for rank in ranks] == [2, 3, 1]
    assert [rank.position for rank in ranks] == [1, 2, 3]


def test_rating_ties_break_on_display_name() -> None:
    event_time = datetime(2016, 3, 1, 19, 0, 0)
    computation = compute_ratings(
        [
            MatchOutcome(event_time=event_time, competitor_a_id=1, competitor_b_id=2, score_a=2, score_b=0),
            MatchOutcome(event_time=event_time, competitor_a_id=3, competitor_b_id=4, score_a=2, score_b=0),
        ],
        display_names={1: "zain", 2: "Wizzrobe", 3: "amsa", 4: "Axe"},
    )
    ranks = rank_ratings(computation.ratings)

    assert [(rank.display_name, rank.rating) for rank in ranks] == [
        ("amsa", 1016),
        ("zain", 1016),
        ("Axe", 984),
        ("Wizzrobe", 984),
    ]


def test_tie_break_is_case_sensitive() -> None:
    ranks = rank_ratings(
        {
            "x": RatingRecord(competitor_id="x", rating=1000, display_name="bob"),
            "y": RatingRecord(competitor_id="y", rating=1000, display_name="Zed"),
        }
    )
    assert [rank.display_name for rank in ranks] == ["Zed", "bob"]


def test_unresolved_names_sort_first_within_a_tie_and_fall_back_to_id() -> None:
    ranks = rank_ratings(
        {
            "b": RatingRecord(competitor_id="b", rating=1000),
            "a": RatingRecord(competitor_id="a", rating=1000),
            "c": RatingRecord(competitor_id="c", rating=1000, display_name="Hax"),
        }
    )
    assert [rank.competitor_id for rank in ranks] == ["a", "b", "c"]


def test_integer_ids_tie_break_numerically() -> None:
    ranks = rank_ratings(
        {
            10: RatingRecord(competitor_id=10, rating=1000),
            9: RatingRecord(competitor_id=9, rating=1000),
            100: RatingRecord(competitor_id=100, rating=1000),
        }
    )
    assert [rank.competitor_id for rank in ranks] == [9, 10, 100]


def test_rank_is_deterministic_across_input_order() -> None:
    records = [
        RatingRecord(competitor_id=5, rating=1003, display_name="S2J"),
        RatingRecord(competitor_id=6, rating=1003, display_name="Plup"),
        RatingRecord(competitor_id=7, rating=950, display_name="Shroomed"),
    ]
    forward = rank_ratings({record.competitor_id: record for record in records})
    backward = rank_ratings({record.competitor_id: record for record in reversed(records)})
    assert forward == backward


def test_rank_of_empty_ratings_is_empty() -> None:
    assert rank_ratings({}) == []
