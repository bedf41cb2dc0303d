"""Review scheduler for mastery_trace.

Two regimes:

- No decay configured: a fixed ladder keyed on mastery.
- Decay configured: solve p_know * (1 - f) ** d = threshold for d,
      d = ln(threshold / p_know) / ln(1 - f)
  floored to whole days and held at or above a per-band minimum so a
  just-reviewed weak item is not immediately due again.
"""

import math

from mastery_trace.bkt.forgetting import SECONDS_PER_DAY, clamp_probability, effective_forget
from mastery_trace.models.due import ReviewSchedule
from mastery_trace.models.parameters import ParameterSet

__all__ = [
    "LADDER",
    "MINIMUM_INTERVAL_LADDER",
    "ladder_days",
    "minimum_interval_days",
    "next_review",
    "validate_threshold",
]

# (upper bound exclusive, days); anything at or above the last bound gets the tail value
LADDER: tuple[tuple[float, int], ...] = (
    (0.60, 0),
    (0.75, 1),
    (0.85, 3),
    (0.95, 7),
)
LADDER_TAIL_DAYS = 14

MINIMUM_INTERVAL_LADDER: tuple[tuple[float, int], ...] = (
    (0.60, 0),
    (0.75, 1),
    (0.85, 3),
)


def _band_days(p_know: float, ladder: tuple[tuple[float, int], ...], tail: int) -> int:
    for upper, days in ladder:
        if p_know < upper:
            return days
    return tail


def ladder_days(p_know: float) -> int:
    """Review interval used when no forgetting rate is configured."""
    return _band_days(clamp_probability(p_know), LADDER, LADDER_TAIL_DAYS)


def minimum_interval_days(p_know: float) -> int:
    """Smallest interval allowed for a mastery band in the decay regime."""
    return _band_days(clamp_probability(p_know), MINIMUM_INTERVAL_LADDER, 0)


def validate_threshold(threshold: float) -> float:
    """Check a recall threshold lies in (0, 1].

    Raises:
        ValueError: If the threshold is outside (0, 1]
    """
    if not (0.0 < threshold <= 1.0):
        raise ValueError(f"Recall threshold must be in (0, 1], got {threshold}")
    return threshold


def _schedule(now: int, days: int) -> ReviewSchedule:
    return ReviewSchedule(next_review_at=now + days * SECONDS_PER_DAY, interval_days=days)


def next_review(
    p_know: float,
    params: ParameterSet,
    threshold: float,
    now: int,
) -> ReviewSchedule:
    """Compute when projected recall falls back to the threshold.

    Args:
        p_know: Current mastery probability
        params: Parameters supplying the forgetting rate
        threshold: Minimum acceptable projected recall (0.0 - 1.0]
        now: Anchor time in epoch seconds

    Returns:
        ReviewSchedule with due instant and whole-day interval
    """
    validate_threshold(threshold)
    p = clamp_probability(p_know)

    f = effective_forget(params.forget)
    if f is None:
        return _schedule(now, ladder_days(p))

    if p <= 0.0:
        return _schedule(now, 0)

    guard = minimum_interval_days(p)
    if p <= threshold:
        return _schedule(now, guard)

    days = max(0, math.floor(math.log(threshold / p) / math.log(1.0 - f)))
    return _schedule(now, max(days, guard))
