"""matches table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Match(Base):
    """One head-to-head match result (one row per match)."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("player1_id <> player2_id", name="ck_matches_distinct_players"),
        CheckConstraint(
            "player1_score >= 0 AND player2_score >= 0",
            name="ck_matches_non_negative_scores",
        ),
        Index("idx_matches_game_type_date", "game_type_id", "date", "id"),
        Index("idx_matches_player1", "player1_id"),
        Index("idx_matches_player2", "player2_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_type_id: Mapped[int] = mapped_column(ForeignKey("game_types.id"), nullable=False)
    tournament: Mapped[str | None] = mapped_column(String(256), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    player1_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    player2_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    player1_score: Mapped[int] = mapped_column(Integer, nullable=False)
    player2_score: Mapped[int] = mapped_column(Integer, nullable=False)
    round: Mapped[int | None] = mapped_column(Integer, nullable=True)
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
