"""Simulation engine that generates sample e-commerce journeys.

Each simulated user arrives on one device from one traffic source and
progresses through the funnel:
  view -> add_to_cart -> checkout -> purchase (-> repeat purchases)

At each stage the user may drop off, which emits an exit event. Variant B
users get a configurable uplift to purchase probability and mobile users a
penalty. All randomness is seeded for full reproducibility.
"""

import random
from datetime import datetime, timedelta, timezone

from cro_analytics.ab.assignment import assign_variant
from cro_analytics.ab.experiment import AB_EXPERIMENT, Experiment
from cro_analytics.collector.schemas import Event, EventType
from cro_analytics.simulator.config import SimulationConfig

START_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def generate_events(
    config: SimulationConfig | None = None,
    experiment: Experiment = AB_EXPERIMENT,
) -> list[Event]:
    """Generate a full set of simulated user events.

    Every user is deterministically assigned to a variant of ``experiment``.
    Returns a list of Event objects sorted by timestamp.
    """
    if config is None:
        config = SimulationConfig()

    rng = random.Random(config.seed)
    all_events: list[Event] = []

    for i in range(config.num_users):
        user_id = f"user_{i:05d}"
        all_events.extend(_simulate_user_journey(user_id, config, rng, experiment))

    all_events.sort(key=lambda e: e.timestamp)
    return all_events


def _simulate_user_journey(
    user_id: str,
    config: SimulationConfig,
    rng: random.Random,
    experiment: Experiment,
) -> list[Event]:
    """Simulate a single user's journey through the funnel."""
    device = rng.choices(config.devices, weights=config.device_weights, k=1)[0]
    traffic = rng.choices(config.traffic_sources, weights=config.traffic_weights, k=1)[0]
    variant = assign_variant(experiment, user_id)
    current_time = START_TIME + timedelta(seconds=rng.randint(0, config.days * 86400))

    events: list[Event] = []

    def emit(event_type: EventType, price: float = 0.0) -> None:
        nonlocal current_time
        events.append(Event(
            user_id=user_id,
            event_type=event_type,
            device=device,
            traffic=traffic,
            variant=variant,
            price=price,
            timestamp=current_time,
        ))
        current_time += timedelta(seconds=rng.randint(5, 300))

    # --- Product views ---
    for _ in range(rng.randint(1, 4)):
        emit(EventType.VIEW)

    # --- Cart and checkout (funnel gates) ---
    for event_type, prob in (
        (EventType.ADD_TO_CART, config.prob_add_to_cart),
        (EventType.CHECKOUT, config.prob_checkout),
    ):
        if rng.random() >= prob:
            emit(EventType.EXIT)
            return events
        emit(event_type)

    # --- Purchase ---
    purchase_prob = config.prob_purchase
    if variant == "B":
        purchase_prob += config.variant_b_uplift
    if device == "mobile":
        purchase_prob -= config.mobile_penalty
    purchase_prob = min(max(purchase_prob, 0.0), 1.0)

    if rng.random() >= purchase_prob:
        emit(EventType.EXIT)
        return events
    emit(EventType.PURCHASE, price=_pick_price(config, rng))

    # --- Repeat purchases ---
    purchases = 1
    while purchases < config.max_purchases and rng.random() < config.prob_repeat_purchase:
        current_time += timedelta(days=rng.randint(1, 7))
        emit(EventType.VIEW)
        emit(EventType.PURCHASE, price=_pick_price(config, rng))
        purchases += 1

    return events


def _pick_price(config: SimulationConfig, rng: random.Random) -> float:
    return rng.choices(config.prices, weights=config.price_weights, k=1)[0]
