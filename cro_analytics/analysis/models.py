"""Result models produced by the analyzers.

All models are frozen and rebuilt from scratch on every analysis pass.
Rates are percentages rounded to one decimal place.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class FunnelCounts(_Frozen):
    view: int = 0
    add_to_cart: int = 0
    checkout: int = 0
    purchase: int = 0


class ConversionRates(_Frozen):
    view_to_cart: float = 0.0
    cart_to_checkout: float = 0.0
    checkout_to_purchase: float = 0.0
    overall: float = 0.0


class FunnelResult(_Frozen):
    counts: FunnelCounts
    conversion_rates: ConversionRates
    total_revenue: float = 0.0
    total_purchases: int = 0
    total_users: int = 0


class DropoffRates(_Frozen):
    view_to_cart: float = 0.0
    cart_to_checkout: float = 0.0
    checkout_to_purchase: float = 0.0


class DropoffResult(_Frozen):
    rates: DropoffRates
    critical_stage: str
    critical_value: float


class VariantStats(_Frozen):
    users: int = 0
    purchases: int = 0
    revenue: float = 0.0
    conversion_rate: float = 0.0


class ABTestResult(_Frozen):
    variant_a: VariantStats
    variant_b: VariantStats
    winner: str
    # None when variant A converts at 0% and the relative change is undefined
    improvement: float | None = None


class CohortMetrics(_Frozen):
    repeat_customers: int = 0
    total_customers: int = 0
    retention_rate: float = 0.0
    avg_repeat_purchases: float = 0.0


class SegmentStats(_Frozen):
    users: int = 0
    purchases: int = 0
    revenue: float = 0.0
    conversion_rate: float = 0.0
    avg_order_value: float = 0.0


class SegmentReport(_Frozen):
    device: dict[str, SegmentStats] = Field(default_factory=dict)
    traffic: dict[str, SegmentStats] = Field(default_factory=dict)


class Recommendation(_Frozen):
    title: str
    description: str
    impact: str
    priority: int


class EventTypeSummary(_Frozen):
    event_type: str
    count: int
    unique_users: int


class AnalyticsBundle(_Frozen):
    """Complete output of one analysis pass."""

    generated_from: int
    event_summary: list[EventTypeSummary]
    funnel: FunnelResult
    dropoff: DropoffResult
    ab_test: ABTestResult
    cohort: CohortMetrics
    segments: SegmentReport
    recommendations: list[Recommendation]
