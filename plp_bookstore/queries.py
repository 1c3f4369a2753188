#!/usr/bin/env python3
# queries.py — run the CRUD, index and aggregation queries on the books collection.
# Make sure MongoDB is running and the collection is seeded (plp-seed).

import argparse

from .config import Config, add_connection_args
from .runner import report, run_queries, save_json
from .steps import STEP_NAMES, select_steps


# =========================
# CLI
# =========================

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Run CRUD, index and aggregation queries on the bookstore collection.")
    add_connection_args(p)
    p.add_argument("--only", nargs="+", choices=STEP_NAMES, metavar="STEP",
                   help="Run only these steps (still in the fixed order).")
    p.add_argument("--skip", nargs="+", choices=STEP_NAMES, metavar="STEP",
                   help="Leave these steps out.")
    p.add_argument("--save_json", type=str, default=None,
                   help="Also write every step result to this JSON file.")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = Config.from_args(args)
    steps = select_steps(args.only, args.skip)

    results = run_queries(config, steps)
    if args.save_json:
        save_json(results, args.save_json)
    code = report(results, planned=len(steps))
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
