"""CSV ingestion: turn raw event rows into validated Event records.

Rows that cannot become an Event are skipped and counted; ingestion never
fails because of a single bad row.
"""

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

import pandas as pd
from pydantic import ValidationError

from cro_analytics.collector.schemas import Event, EventType
from cro_analytics.errors import MalformedRecordError

logger = logging.getLogger(__name__)

COLUMNS: tuple[str, ...] = (
    "user_id",
    "event_type",
    "step",
    "device",
    "traffic",
    "variant",
    "price",
    "timestamp",
)

EXTRA_FIELD = "__extra__"


def _clean(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def _parse_price(raw: str) -> float:
    # Unparsable or absent prices default to 0
    try:
        price = float(raw)
    except ValueError:
        return 0.0
    if not math.isfinite(price):
        return 0.0
    return price


def _parse_timestamp(raw: str) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def parse_row(row: dict[str, Any]) -> Event:
    """Parse one raw row (column name -> value) into an Event.

    Raises MalformedRecordError when the row is blank, misses its user or
    event type, is a purchase with a negative price, or fails model
    validation. Negative prices on other event types are zeroed by the model.
    """
    values = {col: _clean(row.get(col)) for col in COLUMNS}

    if not any(values.values()):
        raise MalformedRecordError("blank row", row)
    if not values["user_id"]:
        raise MalformedRecordError("missing user_id", row)
    if not values["event_type"]:
        raise MalformedRecordError("missing event_type", row)

    price = _parse_price(values["price"])
    if price < 0 and values["event_type"] == EventType.PURCHASE.value:
        raise MalformedRecordError(f"negative price: {price}", row)

    try:
        return Event(
            user_id=values["user_id"],
            event_type=values["event_type"],
            step=values["step"] or None,
            device=values["device"],
            traffic=values["traffic"],
            variant=values["variant"],
            price=price,
            timestamp=_parse_timestamp(values["timestamp"]),
        )
    except ValidationError as e:
        raise MalformedRecordError(str(e), row) from e


def parse_rows(rows: Iterable[dict[str, Any]]) -> tuple[list[Event], int]:
    """Parse raw rows, skipping malformed ones.

    Returns (events, skipped) with events in input order.
    """
    events: list[Event] = []
    skipped = 0
    for i, row in enumerate(rows):
        try:
            events.append(parse_row(row))
        except MalformedRecordError as e:
            skipped += 1
            logger.debug(f"Skipping row {i}: {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed row(s), kept {len(events)}")
    return events, skipped


def load_events_csv(path: str | Path) -> list[Event]:
    """Load events from a CSV file with a header row.

    Everything is read as text so that price and category parsing follow
    the row-level rules above. Lines with more fields than the header are
    dropped, and the first column is never taken as an index, even when
    every row carries one extra field. A trailing empty field is tolerated.
    """
    path = Path(path)
    header = [str(c).strip() for c in pd.read_csv(path, nrows=0).columns]
    # One spare column catches rows with a single extra field
    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        header=0,
        names=header + [EXTRA_FIELD],
        index_col=False,
        on_bad_lines="skip",
    )
    logger.info(f"Read {len(df)} row(s) from {path}")

    extra = df[EXTRA_FIELD].map(_clean) != ""
    if extra.any():
        logger.warning(f"Skipped {int(extra.sum())} row(s) with more fields than the header")
    df = df.loc[~extra].drop(columns=EXTRA_FIELD)

    events, _ = parse_rows(df.to_dict("records"))
    return events
