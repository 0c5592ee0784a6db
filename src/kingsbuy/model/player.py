from dataclasses import dataclass, field
from typing import Any, Callable

from kingsbuy.model.card import CardList

@dataclass
class PlayerState:
    name: str
    buy_policy: Any                       # kingsbuy.bots.costed.BuyPolicy
    reorder_policy: Callable[[Any, int], None]

    hand: CardList = field(default_factory=CardList)

    # Pieces owned; only ever increase during a game
    jacks: int = 0
    queens: int = 0

    def __str__(self) -> str:
        return f"{self.name}-{self.hand}-J:{self.jacks}-Q:{self.queens}"
