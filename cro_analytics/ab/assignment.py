"""Deterministic experiment assignment.

Given the same (experiment_id, user_id) pair, a user always lands in the
same variant, so every simulated event of a journey carries one variant.
"""

import hashlib

from cro_analytics.ab.experiment import Experiment


def hash_bucket(experiment_id: str, user_id: str) -> float:
    """Stable position of a user in [0.0, 1.0) for one experiment."""
    digest = hashlib.sha256(f"{experiment_id}:{user_id}".encode()).digest()
    return int.from_bytes(digest[:8], "big") / (2**64)


def assign_variant(experiment: Experiment, user_id: str) -> str:
    """Pick the variant whose cumulative weight range holds the user's bucket."""
    bucket = hash_bucket(experiment.experiment_id, user_id)

    upper = 0.0
    for variant in experiment.variants:
        upper += variant.weight
        if bucket < upper:
            return variant.name

    # Weights summing to just under 1.0 leave the top edge to the last variant
    return experiment.variants[-1].name
