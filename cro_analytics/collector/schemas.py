"""Event schema definitions for the analytics engine.

Every event follows one flat envelope (user, event type, funnel step,
device, traffic source, experiment variant, price). Category fields are
plain strings so that unrecognized values survive ingestion; the enums
below name the values the fixed-key aggregations understand.
"""

import math
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class EventType(str, Enum):
    VIEW = "view"
    ADD_TO_CART = "add_to_cart"
    CHECKOUT = "checkout"
    PURCHASE = "purchase"
    EXIT = "exit"


class Step(str, Enum):
    PRODUCT = "product"
    CART = "cart"
    ADDRESS = "address"
    CONFIRMATION = "confirmation"
    EXIT = "exit"


class Device(str, Enum):
    MOBILE = "mobile"
    DESKTOP = "desktop"


class VariantName(str, Enum):
    A = "A"
    B = "B"


STEP_FOR_EVENT: dict[str, str] = {
    EventType.VIEW.value: Step.PRODUCT.value,
    EventType.ADD_TO_CART.value: Step.CART.value,
    EventType.CHECKOUT.value: Step.ADDRESS.value,
    EventType.PURCHASE.value: Step.CONFIRMATION.value,
    EventType.EXIT.value: Step.EXIT.value,
}

# Canonical funnel order; exit is a known type but not a funnel stage
FUNNEL_EVENT_TYPES: tuple[str, ...] = (
    EventType.VIEW.value,
    EventType.ADD_TO_CART.value,
    EventType.CHECKOUT.value,
    EventType.PURCHASE.value,
)


class Event(BaseModel):
    """One user interaction.

    Immutable once built. ``step`` is derived from ``event_type`` when the
    type is known; for unknown types the raw step value is kept as-is.
    ``price`` is forced to 0 for anything that is not a purchase.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    event_type: str
    step: str | None = None
    device: str = ""
    traffic: str = ""
    variant: str = ""
    price: float = 0.0
    timestamp: datetime | None = None

    @field_validator("user_id", "event_type")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError("price must be a finite, non-negative number")
        return v

    @field_validator("timestamp")
    @classmethod
    def timestamp_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="before")
    @classmethod
    def derive_step_and_price(cls, data):
        if not isinstance(data, dict):
            return data
        data = {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}
        event_type = str(data.get("event_type") or "").strip()
        if event_type in STEP_FOR_EVENT:
            data["step"] = STEP_FOR_EVENT[event_type]
        elif not data.get("step"):
            data["step"] = None
        if event_type != EventType.PURCHASE.value:
            data["price"] = 0.0
        return data

    @property
    def is_purchase(self) -> bool:
        return self.event_type == EventType.PURCHASE.value

    @property
    def is_funnel_event(self) -> bool:
        return self.event_type in FUNNEL_EVENT_TYPES
