"""Track statistics models for mastery_trace."""

from pydantic import BaseModel, Field

from mastery_trace.models.mastery import TrackKey

__all__ = [
    "TrackStatsDTO",
]


class TrackStatsDTO(BaseModel, frozen=True):
    """Statistics for one track rebuilt from its answer history.

    Attributes:
        subject: Track summarized
        p_know: Mastery after replaying the history
        observation_count: Answers replayed, after dropping same-second duplicates
        last_seen_at: Time of the latest answer, None if never answered
        recent_correct: Correct answers inside the recent window
        recent_wrong: Wrong answers inside the recent window
        window_days: Length of the recent window in days
        next_review_at: Due instant in epoch seconds
        interval_days: Whole days between the last answer (or now) and next_review_at
        schema_version: Schema version for forward compatibility
    """

    subject: TrackKey
    p_know: float = Field(ge=0.0, le=1.0)
    observation_count: int = Field(default=0, ge=0)
    last_seen_at: int | None = None
    recent_correct: int = Field(default=0, ge=0)
    recent_wrong: int = Field(default=0, ge=0)
    window_days: int = Field(ge=1)
    next_review_at: int
    interval_days: int = Field(ge=0)
    schema_version: int = Field(default=1)
