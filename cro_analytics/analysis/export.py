"""CLI entrypoint: analyze an events CSV and export the metrics bundle as JSON.

Usage:
    python -m cro_analytics.analysis.export
    python -m cro_analytics.analysis.export --events data/ecommerce_events.csv --out data/dashboard.json
"""

import argparse
import json
from pathlib import Path

from cro_analytics.analysis.models import AnalyticsBundle
from cro_analytics.analysis.pipeline import AnalyticsSession
from cro_analytics.collector.ingest import load_events_csv
from cro_analytics.logging_config import setup_logging


def bundle_to_json(bundle: AnalyticsBundle) -> str:
    return json.dumps(bundle.model_dump(mode="json"), indent=2, sort_keys=True)


def export_bundle(bundle: AnalyticsBundle, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(bundle_to_json(bundle) + "\n")
    return path


def main(args: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze events and export dashboard data")
    parser.add_argument(
        "--events", type=str, default="data/ecommerce_events.csv", help="Events CSV path"
    )
    parser.add_argument(
        "--out", type=str, default="data/dashboard.json", help="Output JSON path"
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")
    opts = parser.parse_args(args)

    setup_logging(opts.log_level)

    print(f"Loading events from {opts.events}...")
    events = load_events_csv(opts.events)
    print(f"Loaded {len(events)} events")

    session = AnalyticsSession()
    bundle = session.refresh(events)

    funnel = bundle.funnel
    print("Funnel:")
    for stage, users in funnel.counts.model_dump().items():
        print(f"  {stage}: {users}")
    print(f"Overall conversion: {funnel.conversion_rates.overall}%")
    print(f"Critical drop-off: {bundle.dropoff.critical_stage} ({bundle.dropoff.critical_value}%)")
    print(f"A/B winner: {bundle.ab_test.winner}")

    out = export_bundle(bundle, opts.out)
    print(f"\nWrote {out}")
    print("Done.")


if __name__ == "__main__":
    main()
