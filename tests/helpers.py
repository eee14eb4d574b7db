"""Small builders shared by the test modules."""

from cro_analytics.collector.schemas import Event


def make_event(user_id, event_type, variant="A", price=0.0, device="desktop", traffic="organic"):
    return Event(
        user_id=user_id,
        event_type=event_type,
        device=device,
        traffic=traffic,
        variant=variant,
        price=price,
    )
