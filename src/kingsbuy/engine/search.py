# src/kingsbuy/engine/search.py
from __future__ import annotations
import heapq
import math
import random
import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TextIO, Tuple

import numpy as np

from kingsbuy.bots.costed import BuyPolicy, PolicyKind
from kingsbuy.bots.random_policy import mk_random_policy, mk_random_policy_all_kings
from kingsbuy.config import Config
from kingsbuy.constants import REPORT_PERCENTILES
from kingsbuy.engine.tournament import (
    eval_against_policy_set,
    eval_policy_against_random_policy,
    tally_against_random_policy,
)
from kingsbuy.io.corpus import PolicyCorpus, format_record, read_policies
from kingsbuy.io.summaries import outcome_table, percentile_table, write_search_summary
from kingsbuy.model.policy import PolicyEvalResult
from kingsbuy.utils.logging import progress

SCALE = 1000


class ScoreHistogram:
    """
    Counts of scores on the 0..SCALE integer scale, bucketed `width` wide.
    Percentiles report the lower edge of the bucket they fall in.
    """

    def __init__(self, width: int = 1, max_value: int = SCALE) -> None:
        if width <= 0:
            raise ValueError("bucket width must be positive")
        self.width = width
        self.max_value = max_value
        self.counts = np.zeros(max_value // width + 1, dtype=np.int64)

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def increment(self, value: int) -> None:
        if not 0 <= value <= self.max_value:
            raise ValueError(f"value {value} outside 0..{self.max_value}")
        self.counts[value // self.width] += 1

    def record_score(self, score: float) -> None:
        self.increment(int(score * SCALE))

    def percentile(self, p: float) -> int:
        """Nearest-rank percentile: first bucket whose running count reaches p% of the total."""
        total = self.total
        if total == 0:
            raise ValueError("empty histogram")
        if not 0.0 <= p <= 100.0:
            raise ValueError(f"percentile {p} outside 0..100")
        need = max(1, math.ceil(total * p / 100.0))
        bucket = int(np.searchsorted(np.cumsum(self.counts), need, side="left"))
        return bucket * self.width

    def percentiles(self, ps=REPORT_PERCENTILES) -> Dict[float, int]:
        return {p: self.percentile(p) for p in ps}


@dataclass
class SearchStats:
    candidates: int = 0
    emitted: int = 0
    best: Optional[PolicyEvalResult] = None
    interrupted: bool = False
    histogram: ScoreHistogram = field(default_factory=ScoreHistogram)

    # min-heap of (score, candidate number, result); only the best are kept
    kept: List[Tuple[float, int, PolicyEvalResult]] = field(default_factory=list)

    def keep(self, result: PolicyEvalResult, limit: int) -> None:
        entry = (result.score, self.candidates, result)
        if len(self.kept) < limit:
            heapq.heappush(self.kept, entry)
        elif limit > 0:
            heapq.heappushpop(self.kept, entry)

    @property
    def results(self) -> List[PolicyEvalResult]:
        """Kept results in the order they were scored."""
        return [r for _s, _n, r in sorted(self.kept, key=lambda e: e[1])]


def combined_score(cfg: Config, random_score: float, low_score: float, high_score: float) -> float:
    return (random_score * cfg.weight_random
            + low_score * cfg.weight_low
            + high_score * cfg.weight_high)


def _print_percentiles(h: ScoreHistogram, err: TextIO) -> None:
    for p, v in h.percentiles().items():
        print(f"p{p:g}: {v}", file=err)
    print("  =====  ", file=err)


def search_policies(cfg: Config, rng: random.Random,
                    corpus: Optional[PolicyCorpus],
                    out: Optional[TextIO] = None,
                    err: Optional[TextIO] = None,
                    stop: Optional[Callable[[], bool]] = None) -> SearchStats:
    """
    Random search. Each candidate is scored, added to the histogram and
    written to `out` as one JSON record per line.

    With a corpus the score blends the win rate vs random opponents with the
    head-to-head scores vs both corpus tiers. Without one (bootstrap) the
    score is the win rate vs random opponents alone, and only candidates
    above cfg.bootstrap_min_score are written.

    Runs until cfg.max_candidates have been scored (0 = no limit), `stop()`
    returns True, or the run is interrupted (Ctrl-C). An interrupt drops
    only the candidate being scored; everything before it is returned.
    Only the best cfg.summary_keep results are held for the summary.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    stats = SearchStats()
    bootstrap = corpus is None

    while not (cfg.max_candidates and stats.candidates >= cfg.max_candidates):
        try:
            if stop is not None and stop():
                break

            if cfg.split_kings_policy and not bootstrap:
                policy, base, kings = mk_random_policy_all_kings(rng)
            else:
                policy, base = mk_random_policy(rng)
                kings = None

            random_score = eval_policy_against_random_policy(rng, cfg.random_trials, policy)
            if bootstrap:
                score = random_score
            else:
                low = eval_against_policy_set(rng, policy, corpus.low)
                high = eval_against_policy_set(rng, policy, corpus.high)
                score = combined_score(cfg, random_score, low, high)
        except KeyboardInterrupt:
            stats.interrupted = True
            progress("search", f"interrupted after {stats.candidates} candidates", err)
            break

        stats.candidates += 1
        stats.histogram.record_score(score)
        result = PolicyEvalResult(policy=base, all_kings_policy=kings,
                                  score=score, times=cfg.random_trials)
        stats.keep(result, cfg.summary_keep)
        if stats.best is None or score > stats.best.score:
            stats.best = result

        if cfg.progress_every and stats.candidates % cfg.progress_every == 0:
            progress("progress", f"scored {stats.candidates} candidates, emitted {stats.emitted}", err)

        if bootstrap and score <= cfg.bootstrap_min_score:
            continue

        progress("search", f"policy with score {score:.4f}: {policy}", err)
        print(format_record(result), file=out, flush=True)
        stats.emitted += 1

        if score >= cfg.report_threshold:
            _print_percentiles(stats.histogram, err)

    return stats


def run_profiling_batch(policies: int, times: int, seed: int = 123,
                        err: Optional[TextIO] = None) -> float:
    """Seeded batch of random two-table policies; returns the summed win rates."""
    rng = random.Random(seed)
    total = 0.0
    for _ in range(policies):
        policy, _base, _kings = mk_random_policy_all_kings(rng)
        total += eval_policy_against_random_policy(rng, times, policy)
    progress("profile", f"total score: {total}", err)
    return total


FIXED_KINDS = (PolicyKind.IDLE, PolicyKind.ONE_QUEEN, PolicyKind.KING_BUYER, PolicyKind.JACK_BUYER)


def run_fixed_policy_eval(cfg: Config, rng: random.Random,
                          err: Optional[TextIO] = None) -> Dict[str, Counter]:
    """Outcome tallies for each fixed heuristic against random policies."""
    out: Dict[str, Counter] = {}
    for kind in FIXED_KINDS:
        out[kind.value] = tally_against_random_policy(rng, cfg.eval_trials, BuyPolicy.fixed(kind))
        progress("eval", f"{kind.value}: {dict((str(k), v) for k, v in out[kind.value].items())}", err)
    return out


def run_experiment(cfg: Config, out: Optional[TextIO] = None,
                   err: Optional[TextIO] = None,
                   stop: Optional[Callable[[], bool]] = None) -> Dict[str, object]:
    """Dispatch on cfg.mode. Corpus problems surface before any game is played."""
    err = err or sys.stderr
    rng = random.Random(cfg.seed)

    if cfg.mode == "profile":
        total = run_profiling_batch(cfg.profile_policies, cfg.profile_trials, cfg.profile_seed, err)
        return {"mode": cfg.mode, "total_score": total}

    if cfg.mode == "eval":
        tallies = run_fixed_policy_eval(cfg, rng, err)
        print(outcome_table(tallies), file=err)
        return {"mode": cfg.mode, "tallies": {k: {str(r): n for r, n in c.items()} for k, c in tallies.items()}}

    if cfg.mode not in ("search", "bootstrap"):
        raise ValueError(f"unknown mode: {cfg.mode}")

    corpus = None
    if cfg.mode == "search":
        corpus = read_policies(cfg.corpus_path, cfg.tier_low, cfg.tier_high)
        progress("search", f"{len(corpus.low)} policies >= {corpus.tier_low:g}, "
                           f"{len(corpus.high)} policies >= {corpus.tier_high:g}", err)

    stats = search_policies(cfg, rng, corpus, out=out, err=err, stop=stop)
    summary_path = write_search_summary(cfg, stats.results)
    progress("summaries", f"wrote {summary_path}", err)
    if stats.candidates:
        print(percentile_table(stats.histogram.percentiles()), file=err)

    return {
        "mode": cfg.mode,
        "candidates": stats.candidates,
        "emitted": stats.emitted,
        "interrupted": stats.interrupted,
        "best_score": stats.best.score if stats.best else None,
        "summary": summary_path,
    }
