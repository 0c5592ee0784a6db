# src/kingsbuy/bots/random_policy.py
from __future__ import annotations
import random
from typing import List, Tuple

from kingsbuy.bots.costed import BuyPolicy
from kingsbuy.constants import MAX_BUDGET, PIECES_PER_TYPE
from kingsbuy.model.policy import BuyablePiece, BuyPolicyConfig, BuyPolicyItem


def make_random_costed_policy(rng: random.Random) -> BuyPolicyConfig:
    """Every (piece, ordinal) pair once, random budget in 0..10, random order."""
    items: List[BuyPolicyItem] = []
    for num in range(1, PIECES_PER_TYPE + 1):
        for piece in (BuyablePiece.JACK, BuyablePiece.QUEEN, BuyablePiece.KING):
            items.append(BuyPolicyItem(piece, num, rng.randint(0, MAX_BUDGET)))
    rng.shuffle(items)
    return BuyPolicyConfig(items)


def mk_random_policy(rng: random.Random) -> Tuple[BuyPolicy, BuyPolicyConfig]:
    config = make_random_costed_policy(rng)
    return BuyPolicy.costed(config), config


def mk_random_policy_all_kings(rng: random.Random) -> Tuple[BuyPolicy, BuyPolicyConfig, BuyPolicyConfig]:
    base = make_random_costed_policy(rng)
    kings = make_random_costed_policy(rng)
    return BuyPolicy.costed(base, kings), base, kings
