# src/kingsbuy/bots/costed.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from kingsbuy.bots.fixed import (
    idle_policy,
    jack_buyer_policy,
    king_buyer_policy,
    one_queen_then_idle,
)
from kingsbuy.constants import UNATTAINABLE_COST
from kingsbuy.engine.actions import Buy
from kingsbuy.engine.eval import cheapest_card_that_can_pay, next_cost, next_ordinal
from kingsbuy.model.policy import BuyablePiece, BuyPolicyConfig, PolicyEvalResult


def costed_policy(g, pid: int, policy: BuyPolicyConfig) -> Optional[Buy]:
    """
    Walk the priority table in order and buy with the first item that
    (a) targets the piece instance the player would get next and
    (b) has a budget covering the cheapest card able to pay for it.
    """
    hand = g.players[pid].hand

    offers: Dict[BuyablePiece, Tuple[int, Optional[Buy]]] = {}
    for piece in BuyablePiece:
        card = cheapest_card_that_can_pay(hand, next_cost(g, piece))
        if card is None:
            offers[piece] = (UNATTAINABLE_COST, None)
        else:
            offers[piece] = (card.points, Buy(piece, card))

    for item in policy.priorities:
        if item.piece_num != next_ordinal(g, pid, item.piece_type):
            continue
        price, buy = offers[item.piece_type]
        if item.budget >= price:
            return buy
    return None


# ----------------------------
# Policy values
# ----------------------------

class PolicyKind(Enum):
    IDLE = "idle"
    KING_BUYER = "king_buyer"
    JACK_BUYER = "jack_buyer"
    ONE_QUEEN = "one_queen_then_idle"
    COSTED = "costed"


_FIXED = {
    PolicyKind.IDLE: idle_policy,
    PolicyKind.KING_BUYER: king_buyer_policy,
    PolicyKind.JACK_BUYER: jack_buyer_policy,
    PolicyKind.ONE_QUEEN: one_queen_then_idle,
}


@dataclass(frozen=True)
class BuyPolicy:
    """
    What a seat buys. Fixed kinds need no configuration; COSTED holds the
    table used while Kings remain and the one used after the last King.
    """
    kind: PolicyKind
    base: Optional[BuyPolicyConfig] = None
    all_kings: Optional[BuyPolicyConfig] = None

    @staticmethod
    def fixed(kind: PolicyKind) -> "BuyPolicy":
        if kind is PolicyKind.COSTED:
            raise ValueError("costed policies need a priority table")
        return BuyPolicy(kind)

    @staticmethod
    def costed(base: BuyPolicyConfig, all_kings: Optional[BuyPolicyConfig] = None) -> "BuyPolicy":
        return BuyPolicy(PolicyKind.COSTED, base, all_kings if all_kings is not None else base)

    @staticmethod
    def from_result(r: PolicyEvalResult) -> "BuyPolicy":
        return BuyPolicy.costed(r.policy, r.all_kings_policy)

    def __str__(self) -> str:
        if self.kind is not PolicyKind.COSTED:
            return self.kind.value
        if self.all_kings == self.base:
            return str(self.base)
        return f"{self.base} then {self.all_kings}"


def choose_buy(g, pid: int, policy: BuyPolicy) -> Optional[Buy]:
    if policy.kind is PolicyKind.COSTED:
        table = policy.all_kings if g.unbought_kings == 0 else policy.base
        return costed_policy(g, pid, table)
    return _FIXED[policy.kind](g, pid)
