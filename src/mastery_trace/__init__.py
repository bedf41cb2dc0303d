"""mastery_trace - Forgetting-aware knowledge tracing and review scheduling.

This package provides tools for:
- Tracking per-skill and per-item mastery from right/wrong answers
- Projecting mastery forward through days without practice
- Computing the next review date that keeps recall above a target
- Ranking skills and items by how overdue their review is

Example usage:
    from mastery_trace import (
        DEFAULT_PARAMETERS,
        DueAggregator,
        MasteryTracker,
        ObservationDTO,
        SubjectSnapshot,
        TrackKey,
    )

    tracker = MasteryTracker()
    params = DEFAULT_PARAMETERS
    state = tracker.new_state(TrackKey.skill("algebra"), params)
    state = tracker.apply_observation(
        state,
        ObservationDTO(subject_id="algebra", correct=True, occurred_at=1704067200),
        params,
    )
    report = DueAggregator().build_report([SubjectSnapshot(state=state)], now=1704153600)
"""

__version__ = "0.1.0"

from mastery_trace.bkt.parameters import DEFAULT_PARAMETERS, ParameterModel, clamp_parameters
from mastery_trace.config import BKTDefaultSettings, LogSettings, MasteryTraceConfig
from mastery_trace.errors import MasteryTraceError, OrderingViolationError
from mastery_trace.interfaces.skills import SkillResolverInterface
from mastery_trace.interfaces.storage import MasteryStorageInterface
from mastery_trace.models import (
    DueReportDTO,
    DueResultDTO,
    MasteryStateDTO,
    ObservationDTO,
    ParameterSet,
    ReviewSchedule,
    StudyEventDTO,
    SubjectSnapshot,
    TrackKey,
    TrackKind,
    TrackStatsDTO,
)
from mastery_trace.services.aggregator import DueAggregator
from mastery_trace.services.study_service import SessionResult, StudyService
from mastery_trace.services.tracker import MasteryTracker
from mastery_trace.utils.skills import display_skill_name, normalize_skill_name

__all__ = [  # noqa: RUF022
    # Services
    "DueAggregator",
    "MasteryTracker",
    "SessionResult",
    "StudyService",
    # Parameters
    "DEFAULT_PARAMETERS",
    "ParameterModel",
    "clamp_parameters",
    # Config
    "BKTDefaultSettings",
    "LogSettings",
    "MasteryTraceConfig",
    # Errors
    "MasteryTraceError",
    "OrderingViolationError",
    # Interfaces
    "MasteryStorageInterface",
    "SkillResolverInterface",
    # Models
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
    # Skill names
    "display_skill_name",
    "normalize_skill_name",
]
