"""Drop-off between consecutive funnel stages."""

import logging

from cro_analytics.analysis.models import ConversionRates, DropoffRates, DropoffResult
from cro_analytics.analysis.rates import round_half_up

logger = logging.getLogger(__name__)

# Tie-break order for the critical stage: earliest pair wins
DROPOFF_ORDER: tuple[str, ...] = ("view_to_cart", "cart_to_checkout", "checkout_to_purchase")


def calculate_dropoff(rates: ConversionRates) -> DropoffResult:
    """Derive drop-off (100 - conversion) per pair and pick the worst one."""
    dropoffs = {
        name: round_half_up(100 - getattr(rates, name)) for name in DROPOFF_ORDER
    }

    critical = DROPOFF_ORDER[0]
    for name in DROPOFF_ORDER[1:]:
        # strict comparison keeps the earlier stage on ties
        if dropoffs[name] > dropoffs[critical]:
            critical = name

    logger.debug(f"Critical drop-off: {critical} at {dropoffs[critical]}%")
    return DropoffResult(
        rates=DropoffRates(**dropoffs),
        critical_stage=critical,
        critical_value=dropoffs[critical],
    )
