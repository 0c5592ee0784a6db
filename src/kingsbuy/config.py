from dataclasses import dataclass
import argparse

MODES = ("search", "bootstrap", "eval", "profile")

@dataclass
class Config:
    seed:int=42
    mode:str="search"

    # Corpus of previously found policies (jsonl, optionally bz2)
    corpus_path:str="records/policies_above_0.3_score_vs_random_policy.jsonl.bz2"
    tier_low:float=0.3
    tier_high:float=0.5

    # Combined score = weight_random*random + weight_low*tier_low + weight_high*tier_high
    weight_random:float=0.10
    weight_low:float=0.20
    weight_high:float=0.70

    random_trials:int=140_000
    max_candidates:int=0          # 0 = run until interrupted
    split_kings_policy:bool=True  # separate table once all kings are bought
    summary_keep:int=10_000       # best results held for the run summary

    # Percentiles are printed once a candidate reaches this combined score
    report_threshold:float=0.1

    # Bootstrap mode (no corpus): only emit candidates above this win rate
    bootstrap_min_score:float=0.3

    # Fixed heuristic evaluation
    eval_trials:int=100_000

    # Profiling batch
    profile_policies:int=5
    profile_trials:int=10_000
    profile_seed:int=123

    # Progress printing
    progress_every:int=10
    summaries_dir:str="summaries"


def build_config_from_cli(argv=None):
    ap = argparse.ArgumentParser(description="Random search for Jack/Queen/King buy policies")
    ap.add_argument("--mode", choices=MODES, default="search")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--corpus", default=Config.corpus_path)
    ap.add_argument("--tier_low", type=float, default=0.3)
    ap.add_argument("--tier_high", type=float, default=0.5)
    ap.add_argument("--weights", type=float, nargs=3, default=[0.10, 0.20, 0.70],
                    metavar=("RANDOM", "LOW", "HIGH"))
    ap.add_argument("--random_trials", type=int, default=140_000)
    ap.add_argument("--candidates", type=int, default=0, help="Candidates to evaluate (0 = unbounded)")
    ap.add_argument("--single_table", action="store_true", help="Use one priority table for the whole game")
    ap.add_argument("--summary_keep", type=int, default=10_000, help="Best candidates kept for the summary CSV")
    ap.add_argument("--report_threshold", type=float, default=0.1)
    ap.add_argument("--bootstrap_min_score", type=float, default=0.3)
    ap.add_argument("--eval_trials", type=int, default=100_000)
    ap.add_argument("--profile_policies", type=int, default=5)
    ap.add_argument("--profile_trials", type=int, default=10_000)
    ap.add_argument("--progress_every", type=int, default=10)
    ap.add_argument("--summaries_dir", default="summaries")

    args = ap.parse_args(argv)

    w_random, w_low, w_high = args.weights
    cfg = Config(
        seed=args.seed,
        mode=args.mode,
        corpus_path=args.corpus,
        tier_low=args.tier_low,
        tier_high=args.tier_high,
        weight_random=w_random,
        weight_low=w_low,
        weight_high=w_high,
        random_trials=args.random_trials,
        max_candidates=args.candidates,
        split_kings_policy=not args.single_table,
        summary_keep=args.summary_keep,
        report_threshold=args.report_threshold,
        bootstrap_min_score=args.bootstrap_min_score,
        eval_trials=args.eval_trials,
        profile_policies=args.profile_policies,
        profile_trials=args.profile_trials,
        progress_every=args.progress_every,
        summaries_dir=args.summaries_dir,
    )
    return cfg, args
