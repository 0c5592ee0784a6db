from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List

class RulesViolation(RuntimeError):
    """A game rule invariant was broken; always a logic error, never bad input."""


class Card(Enum):
    """Card ranks. Each member carries (symbol, value); the Joker ends the game."""
    ACE = ("A", 1)
    TWO = ("2", 2)
    THREE = ("3", 3)
    FOUR = ("4", 4)
    FIVE = ("5", 5)
    SIX = ("6", 6)
    SEVEN = ("7", 7)
    EIGHT = ("8", 8)
    NINE = ("9", 9)
    TEN = ("0", 10)
    JOKER = ("J", 0)

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def points(self) -> int:
        return self.value[1]

    @staticmethod
    def from_symbol(s: str) -> "Card":
        for c in Card:
            if c.symbol == s:
                return c
        raise ValueError(f"unknown card symbol: {s!r}")


# Ace..Ten, in suit order
NUMBERED = tuple(c for c in Card if c is not Card.JOKER)


@dataclass
class CardList:
    """
    Ordered pile of cards. The *end* of the list is the top, so drawing pops
    from the end and placing appends.
    """
    cards: List[Card] = field(default_factory=list)

    def draw_top_card(self) -> Card:
        if not self.cards:
            raise RulesViolation("draw from an empty pile")
        return self.cards.pop()

    def place_card_on_top(self, c: Card) -> None:
        self.cards.append(c)

    def remove_card_of_type(self, c: Card) -> None:
        try:
            self.cards.remove(c)
        except ValueError:
            raise RulesViolation(f"no {c.name} to spend in {self}") from None

    def is_empty(self) -> bool:
        return not self.cards

    def score_hand(self) -> int:
        return sum(c.points for c in self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return "[" + "".join(c.symbol for c in self.cards) + "]"

    @staticmethod
    def from_symbols(s: str) -> "CardList":
        """'A73' -> CardList([ACE, SEVEN, THREE]); the last symbol is the top."""
        return CardList([Card.from_symbol(ch) for ch in s])
