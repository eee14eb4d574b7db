"""Funnel stage counts and stage-to-stage conversion.

A user counts at a stage if they have at least one event of that type
anywhere in the store. This is "ever reached", not sequential progression:
a user who purchased without a recorded view still counts at purchase, so
a stage conversion can exceed 100%.
"""

import logging
from collections import defaultdict

from cro_analytics.analysis.models import ConversionRates, FunnelCounts, FunnelResult
from cro_analytics.analysis.rates import money, safe_rate
from cro_analytics.analysis.store import EventStore
from cro_analytics.collector.schemas import FUNNEL_EVENT_TYPES

logger = logging.getLogger(__name__)

# (rate name, from stage, to stage) in funnel order
STAGE_PAIRS: tuple[tuple[str, str, str], ...] = (
    ("view_to_cart", "view", "add_to_cart"),
    ("cart_to_checkout", "add_to_cart", "checkout"),
    ("checkout_to_purchase", "checkout", "purchase"),
)


def count_stage_users(store: EventStore) -> FunnelCounts:
    reached: dict[str, set[str]] = defaultdict(set)
    for e in store:
        if e.is_funnel_event:
            reached[e.event_type].add(e.user_id)
    return FunnelCounts(**{stage: len(reached[stage]) for stage in FUNNEL_EVENT_TYPES})


def conversion_rates(counts: FunnelCounts) -> ConversionRates:
    rates = {
        name: safe_rate(getattr(counts, to_stage), getattr(counts, from_stage))
        for name, from_stage, to_stage in STAGE_PAIRS
    }
    rates["overall"] = safe_rate(counts.purchase, counts.view)
    return ConversionRates(**rates)


def analyze_funnel(store: EventStore) -> FunnelResult:
    counts = count_stage_users(store)
    purchases = store.purchases()
    result = FunnelResult(
        counts=counts,
        conversion_rates=conversion_rates(counts),
        total_revenue=money(sum(e.price for e in purchases)),
        total_purchases=len(purchases),
        total_users=len(store.user_ids()),
    )
    logger.debug(
        f"Funnel: {counts.view} -> {counts.add_to_cart} -> {counts.checkout} "
        f"-> {counts.purchase}, overall {result.conversion_rates.overall}%"
    )
    return result
