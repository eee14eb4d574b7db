"""Per-device and per-traffic-source metrics.

Device segments use a fixed key set; events from any other device are
left out. Traffic segments use every source seen in the data, in
first-seen order, so every event takes part.
"""

import logging
from typing import Callable, Iterable

from cro_analytics.analysis.models import SegmentReport, SegmentStats
from cro_analytics.analysis.rates import money, safe_mean, safe_rate
from cro_analytics.analysis.store import EventStore
from cro_analytics.collector.schemas import Device, Event

logger = logging.getLogger(__name__)

DEVICES: tuple[str, ...] = (Device.MOBILE.value, Device.DESKTOP.value)


def segment_stats(events: Iterable[Event]) -> SegmentStats:
    users: set[str] = set()
    purchases = 0
    revenue = 0.0
    for e in events:
        users.add(e.user_id)
        if e.is_purchase:
            purchases += 1
            revenue += e.price

    return SegmentStats(
        users=len(users),
        purchases=purchases,
        revenue=money(revenue),
        conversion_rate=safe_rate(purchases, len(users)),
        avg_order_value=safe_mean(revenue, purchases),
    )


def _segment(
    store: EventStore, keys: Iterable[str], key_of: Callable[[Event], str]
) -> dict[str, SegmentStats]:
    return {
        key: segment_stats(e for e in store if key_of(e) == key)
        for key in keys
    }


def segment_by_device(store: EventStore) -> dict[str, SegmentStats]:
    return _segment(store, DEVICES, lambda e: e.device)


def segment_by_traffic(store: EventStore) -> dict[str, SegmentStats]:
    sources = list(dict.fromkeys(e.traffic for e in store))
    return _segment(store, sources, lambda e: e.traffic)


def analyze_segments(store: EventStore) -> SegmentReport:
    report = SegmentReport(
        device=segment_by_device(store),
        traffic=segment_by_traffic(store),
    )
    logger.debug(f"Segments: {len(report.device)} device, {len(report.traffic)} traffic")
    return report
