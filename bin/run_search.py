#!/usr/bin/env python3
from kingsbuy.config import build_config_from_cli
from kingsbuy.engine.search import run_experiment
import json
import sys

if __name__ == "__main__":
    cfg, args = build_config_from_cli()
    try:
        out = run_experiment(cfg)
    except KeyboardInterrupt:
        sys.exit(130)
    print(json.dumps(out, indent=2), file=sys.stderr)
