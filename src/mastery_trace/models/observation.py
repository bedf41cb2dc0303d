"""Observation models for mastery_trace.

Observations are input events; they are consumed by the tracker and
never retained by the library.
"""

from pydantic import BaseModel, Field

__all__ = [
    "ObservationDTO",
    "StudyEventDTO",
]


class ObservationDTO(BaseModel, frozen=True):
    """A single right/wrong observation for one track.

    Attributes:
        subject_id: Skill or item ID, depending on the track being updated
        correct: Whether the answer was correct
        occurred_at: Observation time in epoch seconds
        schema_version: Schema version for forward compatibility
    """

    subject_id: str = Field(min_length=1, description="Skill or item ID")
    correct: bool
    occurred_at: int = Field(ge=0, description="Epoch seconds")
    schema_version: int = Field(default=1)


class StudyEventDTO(BaseModel, frozen=True):
    """An answered item submitted as part of a study session.

    One event fans out into observations for the item track and for
    every skill track the item maps to.

    Attributes:
        item_id: Answered item ID
        correct: Whether the answer was correct
        occurred_at: Answer time in epoch seconds
        response_time_ms: Optional time taken to answer
        schema_version: Schema version for forward compatibility
    """

    item_id: str = Field(min_length=1, description="Item ID")
    correct: bool
    occurred_at: int = Field(ge=0, description="Epoch seconds")
    response_time_ms: int | None = Field(default=None, ge=0)
    schema_version: int = Field(default=1)

    def observation_for(self, subject_id: str) -> ObservationDTO:
        """Build the observation this event contributes to one track."""
        return ObservationDTO(
            subject_id=subject_id,
            correct=self.correct,
            occurred_at=self.occurred_at,
        )
