"""Experiment definitions used to split simulated traffic.

An experiment has a unique ID and a list of variants with traffic weights.
The analyzers only understand the two variants ``A`` and ``B``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Variant:
    name: str
    weight: float  # Traffic proportion (0.0 to 1.0)


@dataclass(frozen=True)
class Experiment:
    experiment_id: str
    name: str
    variants: tuple[Variant, ...]

    def __post_init__(self):
        total = sum(v.weight for v in self.variants)
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Variant weights must sum to 1.0, got {total}")
        if len(self.variants) < 2:
            raise ValueError("Experiment must have at least 2 variants")
        names = [v.name for v in self.variants]
        if len(names) != len(set(names)):
            raise ValueError("Variant names must be unique")


# Default checkout experiment used by the simulator
AB_EXPERIMENT = Experiment(
    experiment_id="exp_checkout_layout_v1",
    name="Checkout Layout",
    variants=(
        Variant(name="A", weight=0.5),
        Variant(name="B", weight=0.5),
    ),
)
