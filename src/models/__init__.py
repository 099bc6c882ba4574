"""ORM models."""

from models.base import Base
from models.game_type import GameType
from models.match import Match
from models.player import Player

__all__ = [
    "Base",
    "GameType",
    "Match",
    "Player",
]
