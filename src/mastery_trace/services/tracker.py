"""Mastery tracker for mastery_trace.

This module applies observations to a single track: project forgetting
since the last touch, then run the posterior update.
"""

from collections.abc import Iterable

from mastery_trace.bkt.forgetting import SECONDS_PER_DAY
from mastery_trace.bkt.schedule import next_review
from mastery_trace.domain.track import Track
from mastery_trace.logging import get_logger
from mastery_trace.models.mastery import MasteryStateDTO, TrackKey
from mastery_trace.models.observation import ObservationDTO
from mastery_trace.models.parameters import ParameterSet
from mastery_trace.models.stats import TrackStatsDTO

__all__ = [
    "MasteryTracker",
]

logger = get_logger(__name__)


class MasteryTracker:
    """Project-then-update filter over one track at a time.

    The update is path dependent, so batches are always applied in
    non-decreasing timestamp order. Concurrent updates of the same track
    must be serialized by the caller.

    Example:
        tracker = MasteryTracker()
        state = tracker.new_state(TrackKey.skill("algebra"), params)
        state = tracker.apply_observation(state, observation, params)
    """

    def new_state(self, subject: TrackKey, params: ParameterSet) -> MasteryStateDTO:
        """Fresh state at p_init for a track with no history."""
        return Track.fresh(subject, params).to_dto()

    def apply_observation(
        self,
        state: MasteryStateDTO,
        observation: ObservationDTO,
        params: ParameterSet,
        now: int | None = None,
    ) -> MasteryStateDTO:
        """Incorporate one observation into a track.

        Args:
            state: Current track state
            observation: Observation for this track
            params: Parameters of the track
            now: Update time in epoch seconds (default: observation.occurred_at)

        Returns:
            New MasteryStateDTO with last_updated_at set to now

        Raises:
            OrderingViolationError: If now precedes state.last_updated_at
            ValueError: If the observation belongs to another subject
        """
        self._check_subject(state.subject, observation)
        at = observation.occurred_at if now is None else now

        track = Track.from_dto(state, params)
        prior = track.p_know
        track.observe(observation.correct, at)

        logger.debug(
            "track_updated",
            subject=str(state.subject),
            correct=observation.correct,
            old_p_know=prior,
            new_p_know=track.p_know,
        )
        return track.to_dto()

    def apply_observations(
        self,
        state: MasteryStateDTO,
        observations: Iterable[ObservationDTO],
        params: ParameterSet,
    ) -> MasteryStateDTO:
        """Apply a batch of observations in timestamp order.

        Observations collected out of arrival order are sorted (stable)
        before being applied; each observation's own timestamp is its
        update time.

        Raises:
            OrderingViolationError: If the earliest observation precedes
                state.last_updated_at
        """
        ordered = sorted(observations, key=lambda obs: obs.occurred_at)
        track = Track.from_dto(state, params)
        for observation in ordered:
            self._check_subject(state.subject, observation)
            track.observe(observation.correct, observation.occurred_at)
        return track.to_dto()

    def replay(
        self,
        subject: TrackKey,
        observations: Iterable[ObservationDTO],
        params: ParameterSet,
    ) -> MasteryStateDTO:
        """Rebuild a track from its full observation history.

        Stored histories may log the same answer more than once; answers
        sharing a second are replayed once, keeping the first.
        """
        history = self._dedupe(observations)
        return self.apply_observations(self.new_state(subject, params), history, params)

    def summarize(
        self,
        subject: TrackKey,
        observations: Iterable[ObservationDTO],
        params: ParameterSet,
        now: int,
        threshold: float,
        window_days: int = 7,
    ) -> TrackStatsDTO:
        """Replay a history and report recent activity and the next review.

        Args:
            subject: Track to summarize
            observations: Full answer history of the track, in any order
            params: Parameters of the track
            now: Evaluation time in epoch seconds
            threshold: Recall threshold for the schedule
            window_days: Days counted as recent activity

        Returns:
            TrackStatsDTO for the track
        """
        history = self._dedupe(observations)
        state = self.apply_observations(self.new_state(subject, params), history, params)

        since = now - window_days * SECONDS_PER_DAY
        recent = [obs for obs in history if obs.occurred_at >= since]
        anchor = now if state.last_updated_at is None else state.last_updated_at
        schedule = next_review(state.p_know, params, threshold, anchor)

        return TrackStatsDTO(
            subject=subject,
            p_know=state.p_know,
            observation_count=state.observation_count,
            last_seen_at=state.last_updated_at,
            recent_correct=sum(1 for obs in recent if obs.correct),
            recent_wrong=sum(1 for obs in recent if not obs.correct),
            window_days=window_days,
            next_review_at=schedule.next_review_at,
            interval_days=schedule.interval_days,
        )

    @staticmethod
    def _dedupe(observations: Iterable[ObservationDTO]) -> list[ObservationDTO]:
        seen: set[int] = set()
        unique: list[ObservationDTO] = []
        for observation in sorted(observations, key=lambda obs: obs.occurred_at):
            if observation.occurred_at in seen:
                continue
            seen.add(observation.occurred_at)
            unique.append(observation)
        return unique

    @staticmethod
    def _check_subject(subject: TrackKey, observation: ObservationDTO) -> None:
        if observation.subject_id != subject.subject_id:
            raise ValueError(
                f"Observation for {observation.subject_id!r} applied to track {subject}"
            )
