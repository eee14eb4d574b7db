"""Tests for deterministic variant assignment and experiment definitions."""

import pytest

from cro_analytics.ab.assignment import assign_variant, hash_bucket
from cro_analytics.ab.experiment import AB_EXPERIMENT, Experiment, Variant
from cro_analytics.simulator.config import SimulationConfig
from cro_analytics.simulator.engine import generate_events


class TestExperimentDefinition:
    def test_valid_experiment(self):
        exp = Experiment(
            experiment_id="test",
            name="Test",
            variants=(Variant("A", 0.5), Variant("B", 0.5)),
        )
        assert len(exp.variants) == 2

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            Experiment(
                experiment_id="test",
                name="Test",
                variants=(Variant("A", 0.3), Variant("B", 0.3)),
            )

    def test_needs_at_least_two_variants(self):
        with pytest.raises(ValueError, match="at least 2"):
            Experiment(experiment_id="test", name="Test", variants=(Variant("A", 1.0),))

    def test_variant_names_must_be_unique(self):
        with pytest.raises(ValueError, match="unique"):
            Experiment(
                experiment_id="test",
                name="Test",
                variants=(Variant("A", 0.5), Variant("A", 0.5)),
            )

    def test_default_experiment_is_a_b(self):
        assert [v.name for v in AB_EXPERIMENT.variants] == ["A", "B"]


class TestAssignment:
    def test_bucket_in_unit_interval(self):
        for i in range(100):
            assert 0.0 <= hash_bucket("exp", f"user_{i}") < 1.0

    def test_bucket_depends_on_experiment(self):
        assert hash_bucket("exp_a", "user_1") != hash_bucket("exp_b", "user_1")

    def test_deterministic(self):
        """Same user + experiment always gets the same variant."""
        assert assign_variant(AB_EXPERIMENT, "user_001") == assign_variant(AB_EXPERIMENT, "user_001")

    def test_roughly_even_split(self):
        """50/50 experiment should produce roughly even split."""
        assignments = [assign_variant(AB_EXPERIMENT, f"user_{i}") for i in range(10000)]
        assert 4500 <= assignments.count("A") <= 5500

    def test_uneven_split(self):
        """90/10 split should produce roughly 90% in the heavy variant."""
        exp = Experiment(
            experiment_id="uneven", name="Uneven",
            variants=(Variant("A", 0.9), Variant("B", 0.1)),
        )
        assignments = [assign_variant(exp, f"user_{i}") for i in range(10000)]
        assert 8500 <= assignments.count("A") <= 9500


class TestSimulatorVariants:
    SMALL_CONFIG = SimulationConfig(num_users=500, days=7, seed=42)

    def test_user_keeps_one_variant(self):
        events = generate_events(self.SMALL_CONFIG)
        variants_per_user: dict[str, set[str]] = {}
        for e in events:
            variants_per_user.setdefault(e.user_id, set()).add(e.variant)
        assert all(len(v) == 1 for v in variants_per_user.values())

    def test_variant_matches_assignment(self):
        events = generate_events(self.SMALL_CONFIG)
        for e in events[:50]:
            assert e.variant == assign_variant(AB_EXPERIMENT, e.user_id)

    def test_custom_experiment(self):
        exp = Experiment(
            experiment_id="all_b", name="All B",
            variants=(Variant("A", 0.0), Variant("B", 1.0)),
        )
        events = generate_events(self.SMALL_CONFIG, exp)
        assert {e.variant for e in events} == {"B"}
