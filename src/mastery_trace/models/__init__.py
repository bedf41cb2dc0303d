"""Public DTO models for mastery_trace.

This module exports all public data transfer objects.
"""

from mastery_trace.models.due import (
    DueReportDTO,
    DueResultDTO,
    ReviewSchedule,
    SubjectSnapshot,
)
from mastery_trace.models.mastery import MasteryStateDTO, TrackKey, TrackKind
from mastery_trace.models.observation import ObservationDTO, StudyEventDTO
from mastery_trace.models.parameters import ParameterSet
from mastery_trace.models.stats import TrackStatsDTO

__all__ = [
    "DueReportDTO",
    "DueResultDTO",
    "MasteryStateDTO",
    "ObservationDTO",
    "ParameterSet",
    "ReviewSchedule",
    "StudyEventDTO",
    "SubjectSnapshot",
    "TrackKey",
    "TrackKind",
    "TrackStatsDTO",
]
