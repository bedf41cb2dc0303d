"""Internal Track entity for mastery_trace.

One code path serves both item tracks and skill tracks; they differ only
in which key and which parameters the caller hands in.
"""

from dataclasses import dataclass

from mastery_trace.bkt.forgetting import elapsed_days, project_forgetting
from mastery_trace.bkt.posterior import update_mastery
from mastery_trace.models.mastery import MasteryStateDTO, TrackKey
from mastery_trace.models.parameters import ParameterSet

__all__ = [
    "Track",
]


@dataclass
class Track:
    """Internal mutable track with the project-then-update logic.

    Convert to MasteryStateDTO for persistence and external use.
    """

    key: TrackKey
    params: ParameterSet
    p_know: float
    last_updated_at: int | None = None
    observation_count: int = 0

    @classmethod
    def fresh(cls, key: TrackKey, params: ParameterSet) -> "Track":
        """New track at the skill's prior, never observed."""
        return cls(key=key, params=params, p_know=params.p_init)

    def projected(self, now: int) -> float:
        """Mastery at now after forgetting since the last update.

        Raises:
            OrderingViolationError: If now precedes the last update
        """
        if self.last_updated_at is None:
            return self.p_know
        days = elapsed_days(self.last_updated_at, now, subject=str(self.key))
        return project_forgetting(self.p_know, days, self.params.forget)

    def observe(self, correct: bool, now: int) -> float:
        """Incorporate one observation at now and return the new p_know."""
        self.p_know = update_mastery(self.projected(now), correct, self.params)
        self.last_updated_at = now
        self.observation_count += 1
        return self.p_know

    def to_dto(self) -> MasteryStateDTO:
        """Convert to immutable DTO for persistence."""
        return MasteryStateDTO(
            subject=self.key,
            p_know=self.p_know,
            last_updated_at=self.last_updated_at,
            observation_count=self.observation_count,
        )

    @classmethod
    def from_dto(cls, dto: MasteryStateDTO, params: ParameterSet) -> "Track":
        """Create from DTO."""
        return cls(
            key=dto.subject,
            params=params,
            p_know=dto.p_know,
            last_updated_at=dto.last_updated_at,
            observation_count=dto.observation_count,
        )
