"""Forgetting projection for mastery_trace.

Decay is geometric per whole elapsed day:

    p_know' = p_know * (1 - forget) ** floor(days)

which keeps the state a single scalar and lets the scheduler invert
the curve in closed form.
"""

import math

from mastery_trace.errors import OrderingViolationError

__all__ = [
    "FORGET_SAFETY_CEILING",
    "FORGET_SAFETY_FLOOR",
    "SECONDS_PER_DAY",
    "clamp_probability",
    "effective_forget",
    "elapsed_days",
    "project_forgetting",
]

SECONDS_PER_DAY = 86400

FORGET_SAFETY_FLOOR = 1e-6
FORGET_SAFETY_CEILING = 0.2


def clamp_probability(p: float) -> float:
    """Clamp a value to [0, 1]."""
    return max(0.0, min(1.0, p))


def effective_forget(forget: float | None) -> float | None:
    """Bound a forgetting rate for numeric safety.

    Returns None when decay is disabled (None or <= 0).
    """
    if forget is None or forget <= 0:
        return None
    return min(FORGET_SAFETY_CEILING, max(FORGET_SAFETY_FLOOR, forget))


def elapsed_days(since: int, now: int, subject: str | None = None) -> int:
    """Whole days elapsed between two epoch-second timestamps.

    Raises:
        OrderingViolationError: If now precedes since
    """
    if now < since:
        raise OrderingViolationError(occurred_at=now, last_updated_at=since, subject=subject)
    return (now - since) // SECONDS_PER_DAY


def project_forgetting(p_know: float, days: float, forget: float | None) -> float:
    """Project a mastery estimate forward through days without practice.

    Fractional days are truncated: a 1.9-day gap decays as one day.

    Args:
        p_know: Current mastery probability
        days: Elapsed days
        forget: Daily forgetting rate, None or 0 disables decay

    Returns:
        Decayed mastery probability in [0, 1]
    """
    f = effective_forget(forget)
    whole_days = math.floor(days)
    if f is None or whole_days <= 0:
        return clamp_probability(p_know)
    return clamp_probability(p_know * (1.0 - f) ** whole_days)
