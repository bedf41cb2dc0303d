"""Storage interface for mastery_trace.

This module defines the Protocol for the external store that holds
mastery states and tuned parameters. The library never persists
anything itself.
"""

from typing import Protocol, runtime_checkable

from mastery_trace.models.mastery import MasteryStateDTO, TrackKey
from mastery_trace.models.parameters import ParameterSet

__all__ = [
    "MasteryStorageInterface",
]


@runtime_checkable
class MasteryStorageInterface(Protocol):
    """Contract for the mastery state and parameter store.

    Implementations key states by (learner, subject) and parameters
    by skill. Writes for one learner should be applied atomically.
    """

    async def get_state(
        self,
        learner_id: str,
        subject: TrackKey,
    ) -> MasteryStateDTO | None:
        """Get the stored state of one track.

        Args:
            learner_id: Learner ID
            subject: Track key

        Returns:
            MasteryStateDTO if the track has been stored, None otherwise
        """
        ...

    async def save_states(
        self,
        learner_id: str,
        states: list[MasteryStateDTO],
    ) -> None:
        """Save or update several track states for a learner.

        Args:
            learner_id: Learner ID
            states: States to upsert
        """
        ...

    async def get_parameters(self, skill_id: str) -> ParameterSet | None:
        """Get tuned parameters for a skill.

        Args:
            skill_id: Skill ID

        Returns:
            ParameterSet if the skill has tuned parameters, None otherwise
        """
        ...
