"""Templated recommendations built from the analyzer outputs.

The set and order of recommendations is fixed; only the figures quoted
in each description depend on the data.
"""

from cro_analytics.analysis.models import (
    ABTestResult,
    CohortMetrics,
    DropoffResult,
    FunnelResult,
    Recommendation,
    SegmentReport,
    SegmentStats,
)
from cro_analytics.collector.schemas import Device
from cro_analytics.errors import PreconditionViolationError

STAGE_LABELS = {
    "view_to_cart": "Product view → Add to cart",
    "cart_to_checkout": "Cart → Checkout",
    "checkout_to_purchase": "Checkout → Purchase",
}

EMAIL_TRAFFIC = "email"


def _device_recommendation(segments: SegmentReport) -> Recommendation:
    mobile = segments.device.get(Device.MOBILE.value, SegmentStats())
    desktop = segments.device.get(Device.DESKTOP.value, SegmentStats())
    return Recommendation(
        title="Optimize mobile checkout",
        description=(
            f"Mobile converts at {mobile.conversion_rate}% versus "
            f"{desktop.conversion_rate}% on desktop. Simplify mobile forms "
            f"and enable one-tap payment options."
        ),
        impact="High",
        priority=1,
    )


def _dropoff_recommendation(dropoff: DropoffResult) -> Recommendation:
    label = STAGE_LABELS.get(dropoff.critical_stage, dropoff.critical_stage)
    return Recommendation(
        title="Fix the biggest funnel leak",
        description=(
            f"The largest drop-off is {label} at {dropoff.critical_value}%. "
            f"Review this step for friction such as surprise costs or "
            f"required account creation."
        ),
        impact="High",
        priority=2,
    )


def _ab_recommendation(ab_test: ABTestResult) -> Recommendation:
    if ab_test.improvement is None:
        improvement = "n/a"
    else:
        improvement = f"{ab_test.improvement}%"
    return Recommendation(
        title=f"Roll out variant {ab_test.winner}",
        description=(
            f"Variant {ab_test.winner} leads the experiment "
            f"(A: {ab_test.variant_a.conversion_rate}%, "
            f"B: {ab_test.variant_b.conversion_rate}%, "
            f"relative difference {improvement}). "
            f"Ship it to all traffic and plan the next test."
        ),
        impact="Medium",
        priority=3,
    )


def _email_recommendation(segments: SegmentReport) -> Recommendation:
    email = segments.traffic.get(EMAIL_TRAFFIC, SegmentStats())
    return Recommendation(
        title="Grow email campaigns",
        description=(
            f"Email traffic converts at {email.conversion_rate}% with an "
            f"average order value of ${email.avg_order_value:.2f}. "
            f"Invest in segmented campaigns and cart-abandonment emails."
        ),
        impact="Medium",
        priority=4,
    )


def _retention_recommendation(cohort: CohortMetrics, funnel: FunnelResult) -> Recommendation:
    return Recommendation(
        title="Improve customer retention",
        description=(
            f"{cohort.retention_rate}% of {cohort.total_customers} customers "
            f"purchased again ({cohort.repeat_customers} repeat customers, "
            f"total revenue ${funnel.total_revenue:.2f}). Launch a loyalty "
            f"program and post-purchase follow-ups."
        ),
        impact="Low",
        priority=5,
    )


def generate_recommendations(
    funnel: FunnelResult | None,
    dropoff: DropoffResult | None,
    ab_test: ABTestResult | None,
    cohort: CohortMetrics | None,
    segments: SegmentReport | None,
) -> list[Recommendation]:
    """Build the five recommendations, in priority order.

    Every analyzer output must be present; a missing one means the
    pipeline was run out of order and raises PreconditionViolationError.
    """
    inputs = {
        "funnel": funnel,
        "dropoff": dropoff,
        "ab_test": ab_test,
        "cohort": cohort,
        "segments": segments,
    }
    missing = [name for name, value in inputs.items() if value is None]
    if missing:
        raise PreconditionViolationError(
            f"Recommendations need every analyzer output, missing: {', '.join(missing)}"
        )

    return [
        _device_recommendation(segments),
        _dropoff_recommendation(dropoff),
        _ab_recommendation(ab_test),
        _email_recommendation(segments),
        _retention_recommendation(cohort, funnel),
    ]
