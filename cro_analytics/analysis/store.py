"""Immutable event snapshot shared by every analyzer in one pass."""

from collections import Counter, defaultdict
from typing import Iterable, Iterator

from cro_analytics.analysis.models import EventTypeSummary
from cro_analytics.collector.schemas import Event


class EventStore:
    """Ordered, read-only sequence of events.

    Analyzers only read from the store. A refresh builds a new store
    rather than changing this one.
    """

    __slots__ = ("_events",)

    def __init__(self, events: Iterable[Event] = ()):
        self._events: tuple[Event, ...] = tuple(events)

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "EventStore":
        return cls(events)

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __repr__(self) -> str:
        return f"EventStore({len(self._events)} events)"

    def user_ids(self) -> frozenset[str]:
        return frozenset(e.user_id for e in self._events)

    def purchases(self) -> tuple[Event, ...]:
        return tuple(e for e in self._events if e.is_purchase)


def summarize_events(store: EventStore) -> list[EventTypeSummary]:
    """Event count and distinct users per event type, sorted by type."""
    counts = Counter(e.event_type for e in store)
    users: dict[str, set[str]] = defaultdict(set)
    for e in store:
        users[e.event_type].add(e.user_id)

    return [
        EventTypeSummary(
            event_type=event_type,
            count=counts[event_type],
            unique_users=len(users[event_type]),
        )
        for event_type in sorted(counts)
    ]
