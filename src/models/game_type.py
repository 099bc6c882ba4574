"""game_types table model."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class GameType(Base):
    """A competition category; ratings are computed per game type."""

    __tablename__ = "game_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    urlpath: Mapped[str | None] = mapped_column(String(128), nullable=True, unique=True)
