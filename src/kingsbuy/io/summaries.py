# src/kingsbuy/io/summaries.py
from __future__ import annotations
import os
from collections import Counter
from typing import Any, Dict, List

import pandas as pd

from kingsbuy.model.game import GameResult, Outcome
from kingsbuy.model.policy import BuyablePiece, PolicyEvalResult

SEARCH_COLS = [
    "candidate", "score", "times",
    "budget_jack", "budget_queen", "budget_king",
    "first_priority", "kings_budget_king", "split_tables",
]


def _mean_budget(r: PolicyEvalResult, piece: BuyablePiece, kings_table: bool = False) -> float:
    table = r.all_kings_policy if kings_table and r.all_kings_policy else r.policy
    budgets = [p.budget for p in table.priorities if p.piece_type is piece]
    return sum(budgets) / len(budgets) if budgets else 0.0


def build_search_rows(results: List[PolicyEvalResult]) -> List[Dict[str, Any]]:
    rows = []
    for i, r in enumerate(results):
        first = r.policy.priorities[0] if r.policy.priorities else None
        rows.append({
            "candidate": i,
            "score": r.score,
            "times": r.times,
            "budget_jack": _mean_budget(r, BuyablePiece.JACK),
            "budget_queen": _mean_budget(r, BuyablePiece.QUEEN),
            "budget_king": _mean_budget(r, BuyablePiece.KING),
            "first_priority": str(first) if first else None,
            "kings_budget_king": _mean_budget(r, BuyablePiece.KING, kings_table=True),
            "split_tables": r.all_kings_policy is not None,
        })
    return rows


def write_search_summary(cfg, results: List[PolicyEvalResult]) -> str:
    os.makedirs(cfg.summaries_dir, exist_ok=True)
    path = os.path.join(cfg.summaries_dir, f"summary_search_{cfg.seed}_{len(results)}policies.csv")

    rows = build_search_rows(results)
    df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=SEARCH_COLS)
    df = df[SEARCH_COLS]
    df.to_csv(path, index=False)
    return path


def percentile_table(percentiles: Dict[float, int]) -> str:
    """Markdown table of histogram percentiles (scores on the 0..1000 scale)."""
    df = pd.DataFrame(
        [{"percentile": f"p{p:g}", "score_x1000": v} for p, v in percentiles.items()]
    )
    return df.to_markdown(index=False)


def _label(r: GameResult) -> str:
    if r.outcome is Outcome.WINNER:
        return f"win:{r.winner}"
    return r.outcome.value


def outcome_table(tallies: Dict[str, Counter]) -> str:
    """Markdown table: one row per policy, one column per outcome (share of games)."""
    rows = []
    for name, c in tallies.items():
        total = sum(c.values()) or 1
        row: Dict[str, Any] = {"policy": name, "games": sum(c.values())}
        for res, n in sorted(c.items(), key=lambda kv: _label(kv[0])):
            row[_label(res)] = round(n / total, 4)
        rows.append(row)
    df = pd.DataFrame(rows).fillna(0.0)
    return df.to_markdown(index=False)
