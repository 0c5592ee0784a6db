# src/kingsbuy/io/corpus.py
from __future__ import annotations
import bz2
import json
from dataclasses import dataclass, field
from typing import IO, Iterator, List

from kingsbuy.bots.costed import BuyPolicy
from kingsbuy.model.policy import PolicyEvalResult


class CorpusError(ValueError):
    """Corpus file is missing, unreadable, malformed, or has an empty tier."""


def format_record(r: PolicyEvalResult) -> str:
    return json.dumps(r.to_dict(), separators=(",", ":"))


def parse_record(line: str) -> PolicyEvalResult:
    try:
        d = json.loads(line)
        if not isinstance(d, dict):
            raise ValueError(f"record must be an object, got {type(d).__name__}")
        return PolicyEvalResult.from_dict(d)
    except (ValueError, KeyError, TypeError) as e:
        raise CorpusError(f"malformed record: {e}") from e


def _open_text(path: str) -> IO[str]:
    if path.endswith(".bz2"):
        return bz2.open(path, "rt", encoding="utf-8")
    return open(path, "r", encoding="utf-8")


def read_records(path: str) -> Iterator[PolicyEvalResult]:
    """
    Yield every record in a .jsonl / .jsonl.bz2 corpus. Any bad line aborts
    the read; blank lines are ignored.
    """
    try:
        with _open_text(path) as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    yield parse_record(line)
                except CorpusError as e:
                    raise CorpusError(f"{path}:{lineno}: {e}") from e
    except (OSError, EOFError, UnicodeDecodeError) as e:
        raise CorpusError(f"cannot read corpus {path}: {e}") from e


@dataclass
class PolicyCorpus:
    """Opponent tiers, split by each record's score vs random opponents."""
    low: List[BuyPolicy] = field(default_factory=list)
    high: List[BuyPolicy] = field(default_factory=list)
    tier_low: float = 0.3
    tier_high: float = 0.5


def read_policies(path: str, tier_low: float = 0.3, tier_high: float = 0.5) -> PolicyCorpus:
    corpus = PolicyCorpus(tier_low=tier_low, tier_high=tier_high)
    for r in read_records(path):
        if r.score < tier_low:
            continue
        pol = BuyPolicy.from_result(r)
        corpus.low.append(pol)
        if r.score >= tier_high:
            corpus.high.append(pol)

    if not corpus.low:
        raise CorpusError(f"{path}: no policies scoring >= {tier_low}")
    if not corpus.high:
        raise CorpusError(f"{path}: no policies scoring >= {tier_high}")
    return corpus
