"""Due-status models for mastery_trace.

These models are ephemeral outputs of the scheduler and aggregator;
they are never persisted by the library.
"""

from pydantic import BaseModel, Field

from mastery_trace.models.mastery import MasteryStateDTO, TrackKey
from mastery_trace.models.parameters import ParameterSet

__all__ = [
    "DueReportDTO",
    "DueResultDTO",
    "ReviewSchedule",
    "SubjectSnapshot",
]


class ReviewSchedule(BaseModel, frozen=True):
    """Next review instant computed for one mastery estimate.

    Attributes:
        next_review_at: Due instant in epoch seconds
        interval_days: Whole days between the anchor and the due instant
    """

    next_review_at: int
    interval_days: int = Field(ge=0)


class SubjectSnapshot(BaseModel, frozen=True):
    """Aggregator input: a track's current state and its parameters.

    Attributes:
        state: Current mastery state
        parameters: Tuned parameters, or None to use the defaults
    """

    state: MasteryStateDTO
    parameters: ParameterSet | None = None


class DueResultDTO(BaseModel, frozen=True):
    """Due status for one subject.

    Attributes:
        subject: Track evaluated
        p_know: Mastery probability used for scheduling
        next_review_at: Due instant in epoch seconds
        interval_days: Whole days between the anchor and the due instant
        due_in_seconds: next_review_at minus the evaluation time (<= 0 means due)
        mastered: Whether p_know reached the mastery threshold
        schema_version: Schema version for forward compatibility
    """

    subject: TrackKey
    p_know: float = Field(ge=0.0, le=1.0)
    next_review_at: int
    interval_days: int = Field(ge=0)
    due_in_seconds: int
    mastered: bool = False
    schema_version: int = Field(default=1)

    @property
    def is_due(self) -> bool:
        return self.due_in_seconds <= 0


class DueReportDTO(BaseModel, frozen=True):
    """Ranked due status for a collection of subjects.

    Attributes:
        evaluated_at: Evaluation time in epoch seconds
        threshold: Recall threshold used for scheduling
        due: Subjects due now, most overdue first
        not_yet_due: Subjects not yet due, soonest first
        mastered_count: Number of subjects at or above the mastery threshold
        next_due_at: Earliest due instant among not-yet-due subjects
        schema_version: Schema version for forward compatibility
    """

    evaluated_at: int
    threshold: float = Field(gt=0.0, le=1.0)
    due: list[DueResultDTO] = Field(default_factory=list)
    not_yet_due: list[DueResultDTO] = Field(default_factory=list)
    mastered_count: int = Field(default=0, ge=0)
    next_due_at: int | None = None
    schema_version: int = Field(default=1)

    @property
    def ranked(self) -> list[DueResultDTO]:
        """All results, most urgent first."""
        return [*self.due, *self.not_yet_due]

    @property
    def due_subject_ids(self) -> list[str]:
        return [result.subject.subject_id for result in self.due]
