"""Run every analyzer over one event snapshot and publish the result.

The five analyzers are independent reads of the same store; the
recommendation step is the join point and runs last.
"""

import logging
from typing import Iterable

from cro_analytics.analysis.ab_test import evaluate_ab_test
from cro_analytics.analysis.cohort import analyze_cohort
from cro_analytics.analysis.dropoff import calculate_dropoff
from cro_analytics.analysis.funnel import analyze_funnel
from cro_analytics.analysis.models import AnalyticsBundle
from cro_analytics.analysis.recommendations import generate_recommendations
from cro_analytics.analysis.segments import analyze_segments
from cro_analytics.analysis.store import EventStore, summarize_events
from cro_analytics.collector.schemas import Event

logger = logging.getLogger(__name__)


def run_pipeline(store: EventStore) -> AnalyticsBundle:
    """Compute the full metrics bundle for ``store``."""
    logger.info(f"Running analysis over {len(store)} events")

    funnel = analyze_funnel(store)
    dropoff = calculate_dropoff(funnel.conversion_rates)
    ab_test = evaluate_ab_test(store)
    cohort = analyze_cohort(store)
    segments = analyze_segments(store)
    recommendations = generate_recommendations(funnel, dropoff, ab_test, cohort, segments)

    bundle = AnalyticsBundle(
        generated_from=len(store),
        event_summary=summarize_events(store),
        funnel=funnel,
        dropoff=dropoff,
        ab_test=ab_test,
        cohort=cohort,
        segments=segments,
        recommendations=recommendations,
    )
    logger.info(
        f"Analysis complete: {funnel.counts.purchase} purchasers, "
        f"critical drop-off {dropoff.critical_stage}"
    )
    return bundle


class AnalyticsSession:
    """Holds the latest published (store, bundle) pair.

    ``refresh`` builds a complete new pair before replacing the old one, so
    readers never see a store from one pass with metrics from another. If
    the pass fails, the previous pair stays published.
    """

    def __init__(self):
        self._current: tuple[EventStore, AnalyticsBundle] | None = None

    @property
    def store(self) -> EventStore | None:
        return self._current[0] if self._current else None

    @property
    def bundle(self) -> AnalyticsBundle | None:
        return self._current[1] if self._current else None

    def refresh(self, events: Iterable[Event]) -> AnalyticsBundle:
        store = EventStore.from_events(events)
        bundle = run_pipeline(store)
        self._current = (store, bundle)
        return bundle
