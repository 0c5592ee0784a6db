import random
from collections import Counter

import pandas as pd

from kingsbuy.bots.random_policy import make_random_costed_policy
from kingsbuy.config import Config
from kingsbuy.io.summaries import (
    SEARCH_COLS,
    build_search_rows,
    outcome_table,
    percentile_table,
    write_search_summary,
)
from kingsbuy.model.game import GameResult
from kingsbuy.model.policy import PolicyEvalResult


def _results():
    rng = random.Random(9)
    return [
        PolicyEvalResult(make_random_costed_policy(rng), make_random_costed_policy(rng), 0.41, 100),
        PolicyEvalResult(make_random_costed_policy(rng), None, 0.27, 100),
    ]


def test_search_rows():
    rows = build_search_rows(_results())
    assert [r["score"] for r in rows] == [0.41, 0.27]
    assert rows[0]["split_tables"] is True
    assert rows[1]["split_tables"] is False
    assert rows[1]["kings_budget_king"] == rows[1]["budget_king"]
    assert all(0 <= r["budget_jack"] <= 10 for r in rows)


def test_write_search_summary(tmp_path):
    cfg = Config(seed=7, summaries_dir=str(tmp_path / "out"))
    path = write_search_summary(cfg, _results())
    df = pd.read_csv(path)
    assert list(df.columns) == SEARCH_COLS
    assert len(df) == 2
    assert path.endswith("summary_search_7_2policies.csv")


def test_write_empty_search_summary(tmp_path):
    path = write_search_summary(Config(summaries_dir=str(tmp_path)), [])
    assert list(pd.read_csv(path).columns) == SEARCH_COLS


def test_percentile_table_markdown():
    md = percentile_table({25.0: 168, 92.5: 397})
    assert "p25" in md and "p92.5" in md and "397" in md


def test_outcome_table_markdown():
    tallies = {
        "idle": Counter({GameResult.paperclips(): 3, GameResult.winner_named("policy"): 1}),
        "king_buyer": Counter({GameResult.draw(): 2}),
    }
    md = outcome_table(tallies)
    assert "idle" in md and "king_buyer" in md
    assert "paperclips" in md and "win:policy" in md
