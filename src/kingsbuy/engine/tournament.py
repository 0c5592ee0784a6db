# src/kingsbuy/engine/tournament.py
from __future__ import annotations
import random
from collections import Counter
from typing import Sequence

from kingsbuy.bots.costed import BuyPolicy
from kingsbuy.bots.random_policy import mk_random_policy
from kingsbuy.engine.loop import play_game
from kingsbuy.engine.setup import new_game
from kingsbuy.model.game import GameResult

FIRST, SECOND = "first", "second"
POLICY, RANDOM = "policy", "random"


def _play_seated(rng: random.Random, first: BuyPolicy, second: BuyPolicy) -> GameResult:
    return play_game(new_game([first, second], rng, names=[FIRST, SECOND]))


def play_policies_against_each_other(rng: random.Random, a: BuyPolicy, b: BuyPolicy) -> float:
    """
    Two games with seats swapped. A earns 0.5 per win, so 1.0 is a sweep
    and 0.5 a split; draws and paperclips earn nothing.
    """
    score = 0.0
    if _play_seated(rng, a, b) == GameResult.winner_named(FIRST):
        score += 0.5
    if _play_seated(rng, b, a) == GameResult.winner_named(SECOND):
        score += 0.5
    return score


def tally_against_random_policy(rng: random.Random, times: int, policy: BuyPolicy) -> Counter:
    """Outcome counts over `times` games, each vs a fresh random policy in a random seat."""
    results: Counter = Counter()
    for _ in range(times):
        opponent, _config = mk_random_policy(rng)
        if rng.random() < 0.5:
            seats, names = [policy, opponent], [POLICY, RANDOM]
        else:
            seats, names = [opponent, policy], [RANDOM, POLICY]
        results[play_game(new_game(seats, rng, names=names))] += 1
    return results


def eval_policy_against_random_policy(rng: random.Random, times: int, policy: BuyPolicy) -> float:
    """Fraction of outright wins; draws and losses both count as non-wins."""
    if times <= 0:
        raise ValueError("times must be positive")
    results = tally_against_random_policy(rng, times, policy)
    return results[GameResult.winner_named(POLICY)] / times


def eval_against_policy_set(rng: random.Random, policy: BuyPolicy,
                            corpus: Sequence[BuyPolicy]) -> float:
    """Mean head-to-head score against every policy in `corpus`."""
    if not corpus:
        raise ValueError("cannot score against an empty corpus")
    total = 0.0
    for other in corpus:
        total += play_policies_against_each_other(rng, policy, other)
    return total / len(corpus)
