"""Repeat-purchase retention."""

import logging
from collections import Counter

from cro_analytics.analysis.models import CohortMetrics
from cro_analytics.analysis.rates import PCT_DIGITS, safe_mean, safe_rate
from cro_analytics.analysis.store import EventStore

logger = logging.getLogger(__name__)


def analyze_cohort(store: EventStore) -> CohortMetrics:
    """Share of purchasing users who bought more than once."""
    per_user = Counter(e.user_id for e in store.purchases())
    repeat_counts = [n for n in per_user.values() if n > 1]

    metrics = CohortMetrics(
        repeat_customers=len(repeat_counts),
        total_customers=len(per_user),
        retention_rate=safe_rate(len(repeat_counts), len(per_user)),
        avg_repeat_purchases=safe_mean(sum(repeat_counts), len(repeat_counts), PCT_DIGITS),
    )
    logger.debug(
        f"Cohort: {metrics.repeat_customers}/{metrics.total_customers} repeat customers"
    )
    return metrics
