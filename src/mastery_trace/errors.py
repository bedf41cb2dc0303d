"""Exceptions raised by mastery_trace.

Recoverable conditions (out-of-range parameters, degenerate numerics,
missing tuning) are absorbed locally and never raised. Only caller
misuse is reported through these types.
"""

__all__ = [
    "MasteryTraceError",
    "OrderingViolationError",
]


class MasteryTraceError(Exception):
    """Base class for mastery_trace errors."""


class OrderingViolationError(MasteryTraceError, ValueError):
    """An observation is older than the track's last update.

    Applying it would move the filter backward in time, so it is rejected
    instead of being treated as a zero-day gap. Callers decide whether to
    drop, reorder, or alert.
    """

    def __init__(
        self,
        occurred_at: int,
        last_updated_at: int,
        subject: str | None = None,
    ) -> None:
        self.occurred_at = occurred_at
        self.last_updated_at = last_updated_at
        self.subject = subject
        where = f" for {subject}" if subject else ""
        super().__init__(
            f"Observation at {occurred_at} precedes last update at {last_updated_at}{where}"
        )
