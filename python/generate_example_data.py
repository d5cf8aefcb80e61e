#!/usr/bin/env python3
"""Generate an example usage metrics table for plot_user_metrics.py.

Each user gets its own offset and slope so that per-user trends show up once
the points are colored by user.
"""

import argparse

import numpy as np
import pandas as pd

from log_utils import warn


def generate(rows: int = 100, users: int = 15, seed: int = 42) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    if rows < users:
        warn(f"only {rows} rows for {users} users, some users will not appear")

    # Round-robin first so every user appears when rows >= users
    user = rng.permutation(np.arange(rows) % users) + 1

    offset = rng.normal(0.0, 1.0, size=users)
    slope = rng.uniform(0.5, 1.5, size=users)

    log_m1 = rng.normal(2.0, 1.0, size=rows) + offset[user - 1]
    log_m2 = slope[user - 1] * log_m1 + rng.normal(0.0, 0.3, size=rows)

    return pd.DataFrame({
        "metric_1": np.round(np.exp(log_m1), 6),
        "metric_2": np.round(np.exp(log_m2), 6),
        "user": user,
    })


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("--output", "-o", default="example_data.csv", help="Output CSV file")
    parser.add_argument("--rows", type=int, default=100, help="Number of rows")
    parser.add_argument("--users", type=int, default=15, help="Number of distinct users")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    df = generate(args.rows, args.users, args.seed)
    df.to_csv(args.output, index=False)

    print(f"Generated {args.rows} rows -> {args.output}")


if __name__ == "__main__":
    main()
