# src/kingsbuy/bots/fixed.py
# Fixed heuristic buyers. Same costs and card choice as the costed policy,
# just without a priority table.
from __future__ import annotations
from typing import Optional

from kingsbuy.constants import PIECES_PER_TYPE
from kingsbuy.engine.actions import Buy
from kingsbuy.engine.eval import (
    cheapest_card_that_can_pay,
    next_jack_cost,
    next_king_cost,
    next_queen_cost,
)
from kingsbuy.model.policy import BuyablePiece


def _buy_cheapest(g, pid: int, piece: BuyablePiece, cost: int) -> Optional[Buy]:
    card = cheapest_card_that_can_pay(g.players[pid].hand, cost)
    if card is None:
        return None
    return Buy(piece, card)


def idle_policy(g, pid: int) -> Optional[Buy]:
    return None


def king_buyer_policy(g, pid: int) -> Optional[Buy]:
    if g.unbought_kings == 0:
        return None
    return _buy_cheapest(g, pid, BuyablePiece.KING, next_king_cost(g))


def jack_buyer_policy(g, pid: int) -> Optional[Buy]:
    if g.jacks_bought() >= PIECES_PER_TYPE:
        return None
    return _buy_cheapest(g, pid, BuyablePiece.JACK, next_jack_cost(g))


def one_queen_then_idle(g, pid: int) -> Optional[Buy]:
    if g.players[pid].queens > 0 or g.queens_bought() >= PIECES_PER_TYPE:
        return None
    return _buy_cheapest(g, pid, BuyablePiece.QUEEN, next_queen_cost(g))
