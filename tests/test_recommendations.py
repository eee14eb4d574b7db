"""Tests for the templated recommendations."""

import pytest

from cro_analytics.analysis.ab_test import evaluate_ab_test
from cro_analytics.analysis.cohort import analyze_cohort
from cro_analytics.analysis.dropoff import calculate_dropoff
from cro_analytics.analysis.funnel import analyze_funnel
from cro_analytics.analysis.recommendations import generate_recommendations
from cro_analytics.analysis.segments import analyze_segments
from cro_analytics.analysis.store import EventStore
from cro_analytics.errors import PreconditionViolationError

from helpers import make_event


def _inputs(store):
    funnel = analyze_funnel(store)
    return (
        funnel,
        calculate_dropoff(funnel.conversion_rates),
        evaluate_ab_test(store),
        analyze_cohort(store),
        analyze_segments(store),
    )


class TestGenerateRecommendations:
    def test_fixed_slots_in_priority_order(self, scenario_store):
        recs = generate_recommendations(*_inputs(scenario_store))
        assert len(recs) == 5
        assert [r.priority for r in recs] == [1, 2, 3, 4, 5]

    def test_same_slots_for_empty_data(self, scenario_store):
        full = generate_recommendations(*_inputs(scenario_store))
        empty = generate_recommendations(*_inputs(EventStore()))
        assert [r.priority for r in empty] == [r.priority for r in full]
        assert [r.impact for r in empty] == [r.impact for r in full]

    def test_content_cites_metrics(self, scenario_store):
        device, dropoff, ab, email, retention = generate_recommendations(*_inputs(scenario_store))
        assert "0.0% versus 100.0% on desktop" in device.description
        assert "Cart → Checkout at 100.0%" in dropoff.description
        assert ab.title == "Roll out variant A"
        assert "relative difference 0.0%" in ab.description
        assert "Email traffic converts at 0.0%" in email.description
        assert "0.0% of 2 customers" in retention.description

    def test_undefined_improvement(self):
        store = EventStore([make_event("u1", "purchase", variant="B", price=5)])
        ab = generate_recommendations(*_inputs(store))[2]
        assert "relative difference n/a" in ab.description

    def test_email_segment_quoted(self):
        store = EventStore([
            make_event("u1", "view", traffic="email"),
            make_event("u1", "purchase", price=42, traffic="email"),
            make_event("u2", "view", traffic="email"),
        ])
        email = generate_recommendations(*_inputs(store))[3]
        assert "50.0%" in email.description
        assert "$42.00" in email.description

    def test_missing_input_raises(self, scenario_store):
        funnel, dropoff, ab, cohort, _ = _inputs(scenario_store)
        with pytest.raises(PreconditionViolationError, match="segments"):
            generate_recommendations(funnel, dropoff, ab, cohort, None)
