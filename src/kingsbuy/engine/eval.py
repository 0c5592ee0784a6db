# --- src/kingsbuy/engine/eval.py ---
# Cost primitives shared by every buy policy.
from typing import Iterable, Optional

from kingsbuy.constants import PIECES_PER_TYPE, UNATTAINABLE_COST
from kingsbuy.model.card import Card
from kingsbuy.model.policy import BuyablePiece


def _next_cost(bought: int) -> int:
    if bought >= PIECES_PER_TYPE:
        return UNATTAINABLE_COST
    return bought + 1


def next_jack_cost(g) -> int:
    return _next_cost(g.jacks_bought())


def next_queen_cost(g) -> int:
    return _next_cost(g.queens_bought())


def next_king_cost(g) -> int:
    return _next_cost(g.kings_bought)


def next_cost(g, piece: BuyablePiece) -> int:
    if piece is BuyablePiece.JACK:
        return next_jack_cost(g)
    if piece is BuyablePiece.QUEEN:
        return next_queen_cost(g)
    return next_king_cost(g)


def next_ordinal(g, pid: int, piece: BuyablePiece) -> int:
    """
    Which instance of `piece` the player would be buying next. Jacks and
    Queens count the player's own pieces; Kings are shared, so they count
    every King bought so far.
    """
    p = g.players[pid]
    if piece is BuyablePiece.JACK:
        return p.jacks + 1
    if piece is BuyablePiece.QUEEN:
        return p.queens + 1
    return g.kings_bought + 1


def cheapest_card_that_can_pay(cards: Iterable[Card], cost: int) -> Optional[Card]:
    best: Optional[Card] = None
    for c in cards:
        if c.points >= cost and (best is None or c.points < best.points):
            best = c
    return best
