from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from kingsbuy.constants import PIECES_PER_TYPE
from kingsbuy.model.card import CardList, RulesViolation
from kingsbuy.model.player import PlayerState
from kingsbuy.utils.logging import EventLog

__all__ = ["GameState", "GameResult", "Outcome", "RulesViolation"]


class Outcome(Enum):
    PAPERCLIPS = "paperclips"   # Joker drawn before every King was bought
    DRAW = "draw"
    WINNER = "winner"


@dataclass(frozen=True)
class GameResult:
    outcome: Outcome
    winner: Optional[str] = None

    @staticmethod
    def paperclips() -> "GameResult":
        return GameResult(Outcome.PAPERCLIPS)

    @staticmethod
    def draw() -> "GameResult":
        return GameResult(Outcome.DRAW)

    @staticmethod
    def winner_named(name: str) -> "GameResult":
        return GameResult(Outcome.WINNER, name)

    def __str__(self) -> str:
        if self.outcome is Outcome.WINNER:
            return f"WinnerNamed({self.winner})"
        return self.outcome.name.capitalize()


@dataclass
class GameState:
    players: List[PlayerState] = field(default_factory=list)
    remaining_cards: CardList = field(default_factory=CardList)
    unbought_kings: int = PIECES_PER_TYPE

    turn: int = 0
    current_player: int = 0

    # None disables event recording (bulk simulation)
    log: Optional[EventLog] = None

    def __post_init__(self):
        names = [p.name for p in self.players]
        if len(set(names)) != len(names):
            raise RulesViolation(f"player names must be unique: {names}")

    def emit(self, rec: Dict[str, Any]) -> None:
        if self.log is not None:
            self.log.emit(rec)

    @property
    def kings_bought(self) -> int:
        return PIECES_PER_TYPE - self.unbought_kings

    def jacks_bought(self) -> int:
        return sum(p.jacks for p in self.players)

    def queens_bought(self) -> int:
        return sum(p.queens for p in self.players)

    def buy_king(self) -> None:
        if self.unbought_kings <= 0:
            raise RulesViolation("no kings left to buy")
        self.unbought_kings -= 1

    def __str__(self) -> str:
        ps = ", ".join(str(p) for p in self.players)
        return f"Game(players=[{ps}], unbought_kings={self.unbought_kings}, pile={self.remaining_cards})"
