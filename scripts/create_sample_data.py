#!/usr/bin/env python3
"""Create a synthetic customer dataset for trying the analysis pipeline.

Customers are drawn from a handful of latent segments (e.g. young occasional
buyers, frequent high spenders), so k-means has real structure to find:
- customer_id, age, visits_per_month, total_spent columns
- 200 customers by default

Output is written as CSV to data/sample/customers.csv.
"""

from pathlib import Path

import numpy as np
import polars as pl

# (share, age mean/std, visits mean/std, spend mean/std)
SEGMENTS = [
    (0.35, 26, 4, 1.5, 0.8, 70, 20),
    (0.25, 45, 8, 14, 2.5, 880, 150),
    (0.25, 62, 5, 2.5, 1.0, 110, 30),
    (0.15, 34, 5, 9.5, 2.0, 520, 90),
]


def main(n_customers: int = 200, seed: int = 42) -> None:
    """Create synthetic customer CSV."""
    print("━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")
    print("  Synthetic Customer Data Creation")
    print("━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")
    print()

    output_dir = Path("data/sample")
    output_dir.mkdir(parents=True, exist_ok=True)

    rng = np.random.default_rng(seed)
    shares = np.array([s[0] for s in SEGMENTS])
    segment_ids = rng.choice(len(SEGMENTS), size=n_customers, p=shares / shares.sum())

    ages, visits, spend = [], [], []
    for segment_id in segment_ids:
        _, age_mu, age_sd, visit_mu, visit_sd, spend_mu, spend_sd = SEGMENTS[segment_id]
        ages.append(int(np.clip(rng.normal(age_mu, age_sd), 18, 90)))
        visits.append(int(np.clip(round(rng.normal(visit_mu, visit_sd)), 0, None)))
        spend.append(round(float(np.clip(rng.normal(spend_mu, spend_sd), 5, None)), 2))

    customers = pl.DataFrame(
        {
            "customer_id": list(range(1, n_customers + 1)),
            "age": ages,
            "visits_per_month": visits,
            "total_spent": spend,
        }
    )

    output_path = output_dir / "customers.csv"
    customers.write_csv(output_path)

    print(f"  Customers: {len(customers):,}")
    print(f"  Segments:  {len(SEGMENTS)} latent")
    print(f"\n✓ Wrote {output_path}")
    print(f"  Try: personalens analyze {output_path}")


if __name__ == "__main__":
    main()
