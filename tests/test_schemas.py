"""Tests for the Event model and the in-memory event store."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from cro_analytics.analysis.store import EventStore, summarize_events
from cro_analytics.collector.schemas import Event, EventType

from helpers import make_event


class TestEvent:
    def test_step_derived_from_event_type(self):
        assert make_event("u1", "view").step == "product"
        assert make_event("u1", "add_to_cart").step == "cart"
        assert make_event("u1", "checkout").step == "address"
        assert make_event("u1", "purchase", price=10).step == "confirmation"
        assert make_event("u1", "exit").step == "exit"

    def test_known_type_overrides_raw_step(self):
        e = Event(user_id="u1", event_type="view", step="payment")
        assert e.step == "product"

    def test_unknown_type_keeps_raw_step(self):
        e = Event(user_id="u1", event_type="wishlist", step="product")
        assert e.event_type == "wishlist"
        assert e.step == "product"
        assert not e.is_funnel_event

    def test_unknown_type_without_step(self):
        e = Event(user_id="u1", event_type="wishlist", step="")
        assert e.step is None

    def test_funnel_event_flag(self):
        assert make_event("u1", "checkout").is_funnel_event
        assert not make_event("u1", "exit").is_funnel_event

    def test_enum_event_type_accepted(self):
        e = Event(user_id="u1", event_type=EventType.PURCHASE, price=5)
        assert e.event_type == "purchase"
        assert e.is_purchase

    def test_price_zeroed_for_non_purchase(self):
        assert make_event("u1", "view", price=12.5).price == 0.0

    def test_free_purchase_allowed(self):
        assert make_event("u1", "purchase", price=0).price == 0.0

    def test_negative_purchase_price_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            make_event("u1", "purchase", price=-1)

    def test_empty_user_id_rejected(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            make_event("  ", "view")

    def test_user_id_stripped(self):
        assert make_event(" u1 ", "view").user_id == "u1"

    def test_naive_timestamp_becomes_utc(self):
        e = Event(user_id="u1", event_type="view", timestamp=datetime(2024, 1, 1))
        assert e.timestamp.tzinfo == timezone.utc

    def test_event_is_immutable(self):
        e = make_event("u1", "view")
        with pytest.raises(ValidationError):
            e.user_id = "u2"


class TestEventStore:
    def test_preserves_order_and_length(self):
        events = [make_event("u1", "view"), make_event("u2", "exit")]
        store = EventStore(events)
        assert len(store) == 2
        assert list(store) == events

    def test_not_affected_by_source_list_changes(self):
        events = [make_event("u1", "view")]
        store = EventStore.from_events(events)
        events.append(make_event("u2", "view"))
        assert len(store) == 1

    def test_user_ids_distinct(self, scenario_store):
        assert scenario_store.user_ids() == frozenset({"u1", "u2"})

    def test_purchases(self, scenario_store):
        assert [e.price for e in scenario_store.purchases()] == [50.0, 30.0]


class TestSummarizeEvents:
    def test_counts_and_users_per_type(self, scenario_store):
        summary = {s.event_type: s for s in summarize_events(scenario_store)}
        assert summary["view"].count == 2
        assert summary["view"].unique_users == 2
        assert summary["add_to_cart"].count == 1

    def test_sorted_and_includes_unknown_types(self):
        store = EventStore([make_event("u1", "zoom"), make_event("u1", "view")])
        assert [s.event_type for s in summarize_events(store)] == ["view", "zoom"]

    def test_empty_store(self):
        assert summarize_events(EventStore()) == []
