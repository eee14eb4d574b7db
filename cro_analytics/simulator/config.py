"""Simulation parameters for sample e-commerce traffic.

These numbers model a small online store funnel:
  view -> add_to_cart -> checkout -> purchase

Each probability is conditional on reaching the previous stage. Users who
stop early emit an exit event.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    num_users: int = 1000
    # Number of days the simulation spans
    days: int = 30
    # Random seed for reproducibility
    seed: int = 42

    # Funnel step probabilities (conditional on reaching previous step)
    prob_add_to_cart: float = 0.45
    prob_checkout: float = 0.60
    prob_purchase: float = 0.55
    variant_b_uplift: float = 0.07   # +7pp purchase lift for variant B
    mobile_penalty: float = 0.10     # mobile users purchase less often
    # Chance that a purchaser comes back for another order
    prob_repeat_purchase: float = 0.25
    max_purchases: int = 4

    devices: tuple[str, ...] = ("mobile", "desktop")
    device_weights: tuple[float, ...] = (0.6, 0.4)

    traffic_sources: tuple[str, ...] = ("organic", "paid", "email", "direct", "social")
    traffic_weights: tuple[float, ...] = (0.35, 0.25, 0.15, 0.15, 0.10)

    # Catalogue prices, weighted toward cheaper products
    prices: tuple[float, ...] = (19.99, 49.99, 89.0, 149.0)
    price_weights: tuple[float, ...] = (0.4, 0.3, 0.2, 0.1)
