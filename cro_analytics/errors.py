"""Error types raised by the analytics engine.

Only two conditions are exceptional: a row that cannot become an Event
(recovered locally by the ingestion layer) and a pipeline stage invoked
without its inputs (fatal to the run). Zero denominators and unknown
category values are handled as policies, not errors.
"""


class AnalyticsError(Exception):
    """Base class for analytics engine errors."""


class MalformedRecordError(AnalyticsError, ValueError):
    """A raw input row could not be parsed into an Event."""

    def __init__(self, message: str, row: dict | None = None):
        super().__init__(message)
        self.row = row


class PreconditionViolationError(AnalyticsError):
    """A pipeline stage was invoked before its inputs were produced."""
