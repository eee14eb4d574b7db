"""CLI entrypoint: generate simulated events and write them to a CSV file.

Usage:
    python -m cro_analytics.simulator.generate
    python -m cro_analytics.simulator.generate --users 5000 --days 60
    python -m cro_analytics.simulator.generate --out data/ecommerce_events.csv
"""

import argparse
from pathlib import Path

import pandas as pd

from cro_analytics.ab.experiment import AB_EXPERIMENT
from cro_analytics.collector.ingest import COLUMNS
from cro_analytics.collector.schemas import Event
from cro_analytics.simulator.config import SimulationConfig
from cro_analytics.simulator.engine import generate_events


def events_to_frame(events: list[Event]) -> pd.DataFrame:
    rows = [e.model_dump(mode="json") for e in events]
    return pd.DataFrame(rows, columns=list(COLUMNS))


def write_events_csv(events: list[Event], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    events_to_frame(events).to_csv(path, index=False)
    return path


def main(args: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate simulated e-commerce events")
    parser.add_argument("--users", type=int, default=1000, help="Number of users")
    parser.add_argument("--days", type=int, default=30, help="Simulation window in days")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--out", type=str, default="data/ecommerce_events.csv", help="Output CSV path"
    )
    opts = parser.parse_args(args)

    config = SimulationConfig(num_users=opts.users, days=opts.days, seed=opts.seed)

    print(f"Experiment: {AB_EXPERIMENT.name} ({AB_EXPERIMENT.experiment_id})")
    for v in AB_EXPERIMENT.variants:
        print(f"  {v.name}: {v.weight:.0%} traffic")

    print(f"Generating events for {config.num_users} users over {config.days} days (seed={config.seed})...")
    events = generate_events(config)
    print(f"Generated {len(events)} events")

    by_type: dict[str, int] = {}
    for e in events:
        by_type[e.event_type] = by_type.get(e.event_type, 0) + 1
    print("Event breakdown:")
    for etype, count in sorted(by_type.items()):
        print(f"  {etype}: {count}")

    out = write_events_csv(events, opts.out)
    print(f"\nWrote {out}")
    print("Done.")


if __name__ == "__main__":
    main()
