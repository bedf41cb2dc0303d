"""Service layer for mastery_trace.

This module exports the main service entry points.
"""

from mastery_trace.services.aggregator import (
    DEFAULT_MASTERY_THRESHOLD,
    DEFAULT_REVIEW_THRESHOLD,
    DueAggregator,
)
from mastery_trace.services.study_service import SessionResult, StudyService
from mastery_trace.services.tracker import MasteryTracker

__all__ = [
    "DEFAULT_MASTERY_THRESHOLD",
    "DEFAULT_REVIEW_THRESHOLD",
    "DueAggregator",
    "MasteryTracker",
    "SessionResult",
    "StudyService",
]
