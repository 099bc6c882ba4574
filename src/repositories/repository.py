"""Persistence helpers for players, game types and matches."""

from __future__ import annotations

import re
from datetime import UTC, datetime

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from models import Base, GameType, Match, Player

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]+")


def ensure_schema(engine: Engine) -> None:
    """Create required tables and indexes when missing."""
    Base.metadata.create_all(bind=engine, checkfirst=True)


def slugify(value: str) -> str:
    return _NON_ALPHANUMERIC.sub("", value).lower()


def _urlpath_taken(session: Session, model: type[Player] | type[GameType], urlpath: str) -> bool:
    statement = select(model.id).where(model.urlpath == urlpath)
    return session.execute(statement).first() is not None


def _assign_urlpath(
    session: Session,
    row: Player | GameType,
    *,
    source: str,
    urlpath: str | None,
) -> None:
    model = type(row)
    if urlpath is not None:
        requested = urlpath.strip().lower()
        urlpath = slugify(requested)
        if not urlpath:
            raise ValueError("urlpath cannot be blank")
        if urlpath != requested:
            raise ValueError(f"urlpath '{requested}' may only contain letters and digits")
        if _urlpath_taken(session, model, urlpath):
            raise ValueError(f"urlpath '{urlpath}' is already in use")
        row.urlpath = urlpath
        session.add(row)
        session.flush()
        return

    candidate = slugify(source)
    if candidate and not _urlpath_taken(session, model, candidate):
        row.urlpath = candidate
        session.add(row)
        session.flush()
        return

    # Fall back to the generated primary key, suffixed while that is taken.
    session.add(row)
    session.flush()
    candidate = str(row.id)
    suffix = 1
    while _urlpath_taken(session, model, candidate):
        candidate = f"{row.id}-{suffix}"
        suffix += 1
    row.urlpath = candidate
    session.flush()


def add_player(
    session: Session,
    nickname: str,
    *,
    urlpath: str | None = None,
    tag: str | None = None,
) -> Player:
    """Insert a player, deriving a unique urlpath from the nickname when omitted."""
    nickname = nickname.strip()
    if not nickname:
        raise ValueError("nickname cannot be blank")
    player = Player(nickname=nickname, tag=tag)
    _assign_urlpath(session, player, source=nickname, urlpath=urlpath)
    return player


def add_game_type(session: Session, name: str, *, urlpath: str | None = None) -> GameType:
    """Insert a game type, deriving a unique urlpath from the name when omitted."""
    name = name.strip()
    if not name:
        raise ValueError("game type name cannot be blank")
    game_type = GameType(name=name)
    _assign_urlpath(session, game_type, source=name, urlpath=urlpath)
    return game_type


def add_match(
    session: Session,
    *,
    game_type_id: int,
    player1_id: int,
    player2_id: int,
    player1_score: int,
    player2_score: int,
    date: datetime | None = None,
    tournament: str | None = None,
    round_number: int | None = None,
    hidden: bool = False,
) -> Match:
    """Insert one match result."""
    if player1_id == player2_id:
        raise ValueError(f"match needs two different players (got player_id={player1_id} twice)")
    if player1_score < 0 or player2_score < 0:
        raise ValueError(
            f"match scores must be >= 0 (got {player1_score}-{player2_score})"
        )

    match = Match(
        game_type_id=game_type_id,
        player1_id=player1_id,
        player2_id=player2_id,
        player1_score=player1_score,
        player2_score=player2_score,
        date=date or datetime.now(UTC).replace(tzinfo=None),
        tournament=tournament,
        round=round_number,
        hidden=hidden,
    )
    session.add(match)
    session.flush()
    return match


def update_match(
    session: Session,
    match_id: int,
    *,
    player1_id: int | None = None,
    player2_id: int | None = None,
    player1_score: int | None = None,
    player2_score: int | None = None,
    hidden: bool | None = None,
) -> Match:
    """Correct an existing match. Fields left as ``None`` keep their stored value."""
    match = session.get(Match, match_id)
    if match is None:
        raise LookupError(f"match_id={match_id} not found")

    new_player1_id = match.player1_id if player1_id is None else player1_id
    new_player2_id = match.player2_id if player2_id is None else player2_id
    new_player1_score = match.player1_score if player1_score is None else player1_score
    new_player2_score = match.player2_score if player2_score is None else player2_score
    if new_player1_id == new_player2_id:
        raise ValueError(f"match needs two different players (got player_id={new_player1_id} twice)")
    if new_player1_score < 0 or new_player2_score < 0:
        raise ValueError(
            f"match scores must be >= 0 (got {new_player1_score}-{new_player2_score})"
        )

    match.player1_id = new_player1_id
    match.player2_id = new_player2_id
    match.player1_score = new_player1_score
    match.player2_score = new_player2_score
    if hidden is not None:
        match.hidden = hidden
    session.flush()
    return match


def set_match_hidden(session: Session, match_id: int, hidden: bool) -> Match:
    """Hide a match from (or restore it to) rankings."""
    match = session.get(Match, match_id)
    if match is None:
        raise LookupError(f"match_id={match_id} not found")
    match.hidden = hidden
    session.flush()
    return match


def merge_players(session: Session, *, keep_player_id: int, merge_player_id: int) -> int:
    """Fold ``merge_player_id`` into ``keep_player_id`` and delete it.

    Matches between the two players are removed since they would become
    self-matches. Returns the number of matches re-pointed.
    """
    if keep_player_id == merge_player_id:
        raise ValueError(f"cannot merge player_id={keep_player_id} into itself")
    for player_id in (keep_player_id, merge_player_id):
        if session.get(Player, player_id) is None:
            raise LookupError(f"player_id={player_id} not found")

    session.execute(
        delete(Match).where(
            or_(
                and_(Match.player1_id == keep_player_id, Match.player2_id == merge_player_id),
                and_(Match.player1_id == merge_player_id, Match.player2_id == keep_player_id),
            )
        )
    )
    moved_player1 = session.execute(
        update(Match).where(Match.player1_id == merge_player_id).values(player1_id=keep_player_id)
    ).rowcount
    moved_player2 = session.execute(
        update(Match).where(Match.player2_id == merge_player_id).values(player2_id=keep_player_id)
    ).rowcount
    session.execute(delete(Player).where(Player.id == merge_player_id))
    session.flush()
    return int(moved_player1 or 0) + int(moved_player2 or 0)


def fetch_player_by_urlpath(session: Session, urlpath: str) -> Player | None:
    return session.execute(select(Player).where(Player.urlpath == urlpath)).scalar_one_or_none()


def fetch_game_type_by_urlpath(session: Session, urlpath: str) -> GameType | None:
    return session.execute(select(GameType).where(GameType.urlpath == urlpath)).scalar_one_or_none()


def fetch_game_types(session: Session) -> list[GameType]:
    return list(session.execute(select(GameType).order_by(GameType.name, GameType.id)).scalars())


def fetch_matches_for_player(
    session: Session,
    player_id: int,
    *,
    include_hidden: bool = False,
) -> list[Match]:
    """Every match a player took part in, newest first."""
    conditions = [or_(Match.player1_id == player_id, Match.player2_id == player_id)]
    if not include_hidden:
        conditions.append(Match.hidden.is_(False))
    statement = select(Match).where(*conditions).order_by(Match.date.desc(), Match.id.desc())
    return list(session.execute(statement).scalars())


def fetch_display_names(session: Session) -> dict[int, str]:
    """Map every player id to its nickname."""
    rows = session.execute(select(Player.id, Player.nickname)).all()
    return {int(row.id): row.nickname for row in rows}
