# src/kingsbuy/engine/actions.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from kingsbuy.model.card import Card
from kingsbuy.model.game import GameState
from kingsbuy.model.policy import BuyablePiece


@dataclass(frozen=True)
class Buy:
    """Spend `card` from the acting player's hand on the next `piece`."""
    piece: BuyablePiece
    card: Card

    def __str__(self) -> str:
        return f"{self.piece.name.capitalize()}With({self.card.symbol})"


def apply_buy(g: GameState, pid: int, action: Optional[Buy]) -> None:
    if action is None:
        return
    p = g.players[pid]
    p.hand.remove_card_of_type(action.card)
    if action.piece is BuyablePiece.KING:
        g.buy_king()
    elif action.piece is BuyablePiece.JACK:
        p.jacks += 1
    else:
        p.queens += 1
    if g.log is not None:
        g.emit({"a": "buy", "t": g.turn, "p": p.name, "piece": action.piece.value,
                "card": action.card.symbol, "unbought_kings": g.unbought_kings})


# ----------------------------
# Reorder policy
# ----------------------------

def default_reorder_policy(g: GameState, pid: int) -> None:
    """
    Queen holders look at the top (queens + 1) cards and put them back so
    the lowest-valued one is drawn next.
    """
    p = g.players[pid]
    if p.queens == 0:
        return

    peeked: List[Card] = []
    for _ in range(p.queens + 1):
        if g.remaining_cards.is_empty():
            break
        peeked.append(g.remaining_cards.draw_top_card())

    # highest goes back first so the lowest ends up on top
    for c in sorted(peeked, key=lambda c: c.points, reverse=True):
        g.remaining_cards.place_card_on_top(c)

    if g.log is not None:
        g.emit({"a": "reorder", "t": g.turn, "p": p.name, "n": len(peeked)})
