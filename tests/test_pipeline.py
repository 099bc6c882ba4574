"""Tests for the ranking and face-off pipelines."""

from __future__ import annotations

from datetime import datetime

import pytest

from domain.pipeline import face_off, player_history, rank_game_type
from domain.ratings.elo.calculator import EloParameters
from repositories import add_game_type, add_match, add_player


@pytest.fixture()
def seeded_session_factory(session_factory):
    with session_factory() as session:
        melee = add_game_type(session, "Melee")
        pm = add_game_type(session, "Project M")
        armada = add_player(session, "Armada")
        mango = add_player(session, "Mango")
        zhu = add_player(session, "Zhu")
        amsah = add_player(session, "Amsah")
        rows = (
            (melee, armada, 3, 0, mango, 1, False),
            (melee, zhu, 2, 0, amsah, 2, False),
            (melee, mango, 0, 0, armada, 3, False),
            (melee, mango, 3, 0, armada, 4, True),
            (pm, zhu, 3, 0, armada, 5, False),
        )
        for game_type, player1, score1, score2, player2, day, hidden in rows:
            add_match(
                session,
                game_type_id=game_type.id,
                player1_id=player1.id,
                player2_id=player2.id,
                player1_score=score1,
                player2_score=score2,
                date=datetime(2016, 9, day),
                hidden=hidden,
            )
        session.commit()
    return session_factory


def test_rank_game_type_orders_players_and_reports_skips(seeded_session_factory) -> None:
    lines: list[str] = []
    summary = rank_game_type(
        session_factory=seeded_session_factory,
        game_type_urlpath="melee",
        params=EloParameters(),
        echo=lines.append,
    )

    assert summary.game_type_name == "Melee"
    assert summary.processed_outcomes == 2
    assert [(rank.display_name, rank.rating) for rank in summary.ranks] == [
        ("Armada", 1016),
        ("Zhu", 1016),
        ("Amsah", 984),
        ("Mango", 984),
    ]
    assert [rank.position for rank in summary.ranks] == [1, 2, 3, 4]
    assert [skipped.reason for skipped in summary.skipped] == ["no_games"]
    assert len(summary.events) == 4
    assert lines[0].startswith("skipped match_id=")
    assert "reason=no_games" in lines[0]
    assert lines[-1].startswith("ranked game_type=melee")
    assert "ranked_players=4" in lines[-1]


def test_rank_game_type_can_include_hidden_matches(seeded_session_factory) -> None:
    summary = rank_game_type(
        session_factory=seeded_session_factory,
        game_type_urlpath="melee",
        params=EloParameters(),
        include_hidden=True,
    )
    ratings = {rank.display_name: rank.rating for rank in summary.ranks}
    assert summary.processed_outcomes == 3
    assert ratings["Mango"] > 984
    assert ratings["Armada"] < 1016


def test_rank_game_type_keeps_players_with_missing_profiles(session_factory) -> None:
    with session_factory() as session:
        melee = add_game_type(session, "Melee")
        known = add_player(session, "PPMD")
        add_match(
            session,
            game_type_id=melee.id,
            player1_id=known.id,
            player2_id=4242,
            player1_score=1,
            player2_score=2,
            date=datetime(2016, 10, 1),
        )
        session.commit()

    lines: list[str] = []
    summary = rank_game_type(
        session_factory=session_factory,
        game_type_urlpath="melee",
        params=EloParameters(),
        echo=lines.append,
    )

    assert [(rank.competitor_id, rank.display_name) for rank in summary.ranks] == [
        (4242, ""),
        (known.id, "PPMD"),
    ]
    assert "unresolved_names=1" in lines[-1]


def test_rank_unknown_game_type_raises(session_factory) -> None:
    with pytest.raises(LookupError, match="No game type with urlpath 'brawl'"):
        rank_game_type(
            session_factory=session_factory,
            game_type_urlpath="brawl",
            params=EloParameters(),
        )


def test_face_off_summarizes_non_hidden_matches(seeded_session_factory) -> None:
    summary = face_off(
        session_factory=seeded_session_factory,
        player1_urlpath="mango",
        player2_urlpath="armada",
    )

    record = summary.head_to_head
    assert summary.player1_name == "Mango"
    assert summary.player2_name == "Armada"
    assert record.matches_played == 2
    assert record.a_match_wins == 0
    assert record.b_match_wins == 1
    assert record.draws == 1
    assert record.b_games_won == 3


def test_face_off_unknown_player_raises(seeded_session_factory) -> None:
    with pytest.raises(LookupError, match="No player with urlpath 'hbox'"):
        face_off(
            session_factory=seeded_session_factory,
            player1_urlpath="mango",
            player2_urlpath="hbox",
        )


def test_player_history_groups_by_game_type_newest_first(seeded_session_factory) -> None:
    history = player_history(session_factory=seeded_session_factory, player_urlpath="armada")

    assert history.player_name == "Armada"
    assert [group.game_type_name for group in history.groups] == ["Project M", "Melee"]
    assert [outcome.event_time.day for outcome in history.groups[0].outcomes] == [5]
    assert [outcome.event_time.day for outcome in history.groups[1].outcomes] == [3, 1]

    opponent = history.groups[0].outcomes[0].competitor_a_id
    assert history.display_names[opponent] == "Zhu"


def test_player_history_can_include_hidden_matches(seeded_session_factory) -> None:
    history = player_history(
        session_factory=seeded_session_factory,
        player_urlpath="armada",
        include_hidden=True,
    )
    melee = history.groups[1]
    assert [outcome.event_time.day for outcome in melee.outcomes] == [4, 3, 1]


def test_player_history_of_player_without_matches_is_empty(session_factory) -> None:
    with session_factory() as session:
        add_player(session, "Hungrybox")
        session.commit()

    history = player_history(session_factory=session_factory, player_urlpath="hungrybox")
    assert history.groups == []


def test_player_history_unknown_player_raises(session_factory) -> None:
    with pytest.raises(LookupError, match="No player with urlpath 'hbox'"):
        player_history(session_factory=session_factory, player_urlpath="hbox")
