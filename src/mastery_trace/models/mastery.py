"""Mastery state models for mastery_trace.

These models represent the per-track hidden-state estimate that
callers persist between observations.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "MasteryStateDTO",
    "TrackKey",
    "TrackKind",
]


class TrackKind(StrEnum):
    """Which kind of subject a track follows."""

    SKILL = "skill"
    ITEM = "item"


class TrackKey(BaseModel, frozen=True):
    """Opaque identifier of one track for a learner.

    Attributes:
        kind: Skill or item track
        subject_id: Skill or item identifier
    """

    kind: TrackKind
    subject_id: str = Field(min_length=1, description="Skill or item ID")

    @classmethod
    def skill(cls, skill_id: str) -> "TrackKey":
        return cls(kind=TrackKind.SKILL, subject_id=skill_id)

    @classmethod
    def item(cls, item_id: str) -> "TrackKey":
        return cls(kind=TrackKind.ITEM, subject_id=item_id)

    def __str__(self) -> str:
        return f"{self.kind}:{self.subject_id}"


class MasteryStateDTO(BaseModel, frozen=True):
    """Mastery estimate for one (learner, subject) track.

    A fresh state has last_updated_at=None and p_know equal to the
    skill's p_init; forgetting is never projected until the first
    observation has been incorporated.

    Attributes:
        subject: Track this state belongs to
        p_know: Probability the hidden "known" state holds (0.0 - 1.0)
        last_updated_at: Timestamp of the last incorporated observation (epoch seconds)
        observation_count: Number of observations incorporated so far
        schema_version: Schema version for forward compatibility
    """

    subject: TrackKey
    p_know: float = Field(ge=0.0, le=1.0, description="Mastery probability")
    last_updated_at: int | None = Field(default=None, ge=0, description="Epoch seconds")
    observation_count: int = Field(default=0, ge=0)
    schema_version: int = Field(default=1)

    @property
    def observed(self) -> bool:
        """True once at least one observation has been incorporated."""
        return self.last_updated_at is not None
