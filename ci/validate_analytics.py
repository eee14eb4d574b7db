"""CI validation: verify an exported metrics bundle is complete and sane.

This script is the final gate in CI. It reads the exported dashboard JSON
and asserts structural and logical invariants. If anything is wrong, it
exits non-zero and fails the build.

Usage:
    python ci/validate_analytics.py
    python ci/validate_analytics.py --data data/dashboard.json
"""

import argparse
import json
import sys
from pathlib import Path

REQUIRED_TOP_KEYS = {
    "event_summary",
    "funnel",
    "dropoff",
    "ab_test",
    "cohort",
    "segments",
    "recommendations",
}
FUNNEL_STAGES = ["view", "add_to_cart", "checkout", "purchase"]
DROPOFF_PAIRS = ["view_to_cart", "cart_to_checkout", "checkout_to_purchase"]
DEVICES = {"mobile", "desktop"}
RECOMMENDATION_COUNT = 5


def _check_rate(errors: list[str], label: str, value) -> None:
    if not isinstance(value, (int, float)) or value < 0:
        errors.append(f"{label} has invalid rate: {value}")


def validate(data: dict) -> list[str]:
    """Return a list of validation errors (empty = pass)."""
    errors = []

    # --- Top-level structure ---
    for key in sorted(REQUIRED_TOP_KEYS):
        if key not in data:
            errors.append(f"Missing top-level key: {key}")

    if errors:
        return errors  # Can't continue without structure

    # --- Event summary ---
    summary = data["event_summary"]
    if not summary:
        errors.append("event_summary is empty — no events were analysed")
    else:
        for item in summary:
            if item["count"] <= 0:
                errors.append(f"event_summary {item['event_type']} has count <= 0")
            if item["unique_users"] > item["count"]:
                errors.append(f"event_summary {item['event_type']} has more users than events")

    # --- Funnel ---
    funnel = data["funnel"]
    counts = funnel.get("counts", {})
    stages = [s for s in FUNNEL_STAGES if s in counts]
    if stages != FUNNEL_STAGES:
        errors.append(f"Funnel stages {list(counts)} != expected {FUNNEL_STAGES}")
    else:
        for stage in FUNNEL_STAGES:
            if counts[stage] > funnel.get("total_users", 0):
                errors.append(f"Funnel stage {stage} exceeds total users")
    for name, rate in funnel.get("conversion_rates", {}).items():
        _check_rate(errors, f"Conversion {name}", rate)

    # --- Drop-off ---
    dropoff = data["dropoff"]
    rates = dropoff.get("rates", {})
    conversion = funnel.get("conversion_rates", {})
    for pair in DROPOFF_PAIRS:
        if pair not in rates:
            errors.append(f"Drop-off missing pair: {pair}")
        elif pair in conversion and abs(rates[pair] - (100 - conversion[pair])) > 0.05:
            errors.append(f"Drop-off {pair} does not match its conversion rate")
    critical = dropoff.get("critical_stage")
    if critical not in DROPOFF_PAIRS:
        errors.append(f"Invalid critical drop-off stage: {critical}")
    elif any(rates.get(p, 0) > rates.get(critical, 0) for p in DROPOFF_PAIRS):
        errors.append(f"Critical drop-off {critical} is not the largest")

    # --- A/B test ---
    ab_test = data["ab_test"]
    if ab_test.get("winner") not in ("A", "B"):
        errors.append(f"A/B test invalid winner: {ab_test.get('winner')}")
    for key in ("variant_a", "variant_b"):
        stats = ab_test.get(key)
        if stats is None:
            errors.append(f"A/B test missing {key}")
            continue
        if stats["users"] == 0 and stats["conversion_rate"] != 0:
            errors.append(f"A/B test {key} has a rate but 0 users")
        _check_rate(errors, f"A/B test {key}", stats["conversion_rate"])
    improvement = ab_test.get("improvement")
    if improvement is not None and improvement < 0:
        errors.append(f"A/B test improvement is negative: {improvement}")

    # --- Cohort ---
    cohort = data["cohort"]
    if cohort["repeat_customers"] > cohort["total_customers"]:
        errors.append("Cohort has more repeat customers than customers")
    if not 0 <= cohort["retention_rate"] <= 100:
        errors.append(f"Cohort retention out of range: {cohort['retention_rate']}")

    # --- Segments ---
    device = data["segments"].get("device", {})
    if set(device) != DEVICES:
        errors.append(f"Device segments {sorted(device)} != expected {sorted(DEVICES)}")
    for group in ("device", "traffic"):
        for key, stats in data["segments"].get(group, {}).items():
            if stats["purchases"] == 0 and stats["avg_order_value"] != 0:
                errors.append(f"Segment {group}={key} has order value without purchases")

    # --- Recommendations ---
    recommendations = data["recommendations"]
    if len(recommendations) != RECOMMENDATION_COUNT:
        errors.append(
            f"Expected {RECOMMENDATION_COUNT} recommendations, got {len(recommendations)}"
        )
    priorities = [r.get("priority") for r in recommendations]
    if priorities != sorted(priorities):
        errors.append("Recommendations are not in priority order")

    return errors


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate exported analytics data")
    parser.add_argument(
        "--data",
        default="data/dashboard.json",
        help="Path to exported dashboard JSON",
    )
    opts = parser.parse_args()

    path = Path(opts.data)
    if not path.exists():
        print(f"FAIL: {opts.data} not found. Run 'python -m cro_analytics.analysis.export' first.")
        sys.exit(1)

    data = json.loads(path.read_text())
    errors = validate(data)

    if errors:
        print(f"FAIL: {len(errors)} validation error(s):")
        for e in errors:
            print(f"  - {e}")
        sys.exit(1)

    summary = data["event_summary"]
    total_events = sum(item["count"] for item in summary)
    counts = data["funnel"]["counts"]

    print("PASS: Analytics integrity validated")
    print(f"  Events: {total_events:,}")
    print(f"  Funnel: {counts['view']:,} -> {counts['purchase']:,} users")
    print(f"  Critical drop-off: {data['dropoff']['critical_stage']}")
    print(f"  A/B winner: {data['ab_test']['winner']}")


if __name__ == "__main__":
    main()
