"""Shared fixtures for the analytics engine tests."""

import pytest

from cro_analytics.analysis.store import EventStore

from helpers import make_event


@pytest.fixture
def scenario_store():
    """Two users on desktop: u1 in variant A, u2 in variant B."""
    return EventStore([
        make_event("u1", "view"),
        make_event("u1", "add_to_cart"),
        make_event("u1", "purchase", price=50),
        make_event("u2", "view", variant="B"),
        make_event("u2", "purchase", variant="B", price=30),
    ])
