"""Internal domain entities for mastery_trace."""

from mastery_trace.domain.track import Track

__all__ = [
    "Track",
]
