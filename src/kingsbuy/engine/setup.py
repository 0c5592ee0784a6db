# src/kingsbuy/engine/setup.py
from __future__ import annotations
import random
from typing import List, Optional, Sequence

from kingsbuy.constants import PIECES_PER_TYPE, SAFE_DRAWS, SUITS
from kingsbuy.model.card import Card, CardList, NUMBERED
from kingsbuy.model.player import PlayerState as Player
from kingsbuy.model.game import GameState as Game
from kingsbuy.utils.logging import EventLog
from kingsbuy.engine.actions import default_reorder_policy


# ---------------- Deck ----------------
def init_deck(rng: random.Random) -> CardList:
    """
    One Joker plus four suits of Ace..Ten, shuffled until the Joker cannot be
    drawn within the first SAFE_DRAWS cards.
    """
    cards: List[Card] = [Card.JOKER]
    for _ in range(SUITS):
        cards.extend(NUMBERED)

    # Joker starts at index 0, so this always shuffles at least once
    while cards.index(Card.JOKER) < SAFE_DRAWS:
        rng.shuffle(cards)

    # the pile draws from the end
    cards.reverse()
    return CardList(cards)


# ---------------- Setup ----------------
def new_game(policies: Sequence, rng: random.Random,
             names: Optional[Sequence[str]] = None,
             log: Optional[EventLog] = None) -> Game:
    """Seat one player per policy, in order, around a freshly shuffled deck."""
    if names is None:
        names = [f"p{i + 1}" for i in range(len(policies))]
    if len(names) != len(policies):
        raise ValueError("need one name per policy")

    players = [Player(name=n, buy_policy=pol, reorder_policy=default_reorder_policy)
               for n, pol in zip(names, policies)]
    g = Game(players=players, remaining_cards=init_deck(rng),
             unbought_kings=PIECES_PER_TYPE, log=log)
    if log is not None:
        g.emit({"a": "game_start", "players": list(names), "pile": str(g.remaining_cards)})
    return g
