"""Study service for mastery_trace.

This module connects the tracker and aggregator to the external store
and skill resolver: it fans a study session out into item and skill
tracks, reports which items are due and summarizes answer histories.
"""

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from mastery_trace.bkt.parameters import ParameterModel
from mastery_trace.config import MasteryTraceConfig
from mastery_trace.domain.track import Track
from mastery_trace.interfaces.skills import SkillResolverInterface
from mastery_trace.interfaces.storage import MasteryStorageInterface
from mastery_trace.logging import get_logger
from mastery_trace.models.due import DueReportDTO, SubjectSnapshot
from mastery_trace.models.mastery import MasteryStateDTO, TrackKey, TrackKind
from mastery_trace.models.observation import StudyEventDTO
from mastery_trace.models.parameters import ParameterSet
from mastery_trace.models.stats import TrackStatsDTO
from mastery_trace.services.aggregator import DueAggregator
from mastery_trace.services.tracker import MasteryTracker

__all__ = [
    "SessionResult",
    "StudyService",
]

logger = get_logger(__name__)


@dataclass
class SessionResult:
    """Statistics from a recorded study session."""

    events_processed: int = 0
    events_skipped: int = 0
    skills_updated: int = 0
    items_updated: int = 0
    timed_events: int = 0
    total_response_time_ms: int = 0
    states: list[MasteryStateDTO] = field(default_factory=list)

    @property
    def mean_response_time_ms(self) -> float | None:
        """Average answer time over processed events that reported one."""
        if not self.timed_events:
            return None
        return self.total_response_time_ms / self.timed_events


class StudyService:
    """Records study sessions and reports due items for a learner.

    An answered item updates its own track, using the primary skill's
    parameters, and the track of every skill it maps to, each with that
    skill's parameters. Tracks are independent; there is no cross-skill
    coupling.

    The service holds no locks: callers must not record two sessions for
    the same learner concurrently.

    Example:
        service = StudyService(storage, resolver)
        result = await service.record_session("learner-1", events)
        items = await service.recommended_items("learner-1", item_ids)
    """

    def __init__(
        self,
        storage: MasteryStorageInterface,
        skill_resolver: SkillResolverInterface,
        config: MasteryTraceConfig | None = None,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            storage: Store for mastery states and tuned parameters
            skill_resolver: Item-to-skill lookup
            config: Library configuration (default: loaded from environment)
        """
        self._storage = storage
        self._skill_resolver = skill_resolver
        self._config = config or MasteryTraceConfig()
        self._parameter_model = ParameterModel(self._config.bkt.to_parameters())
        self._tracker = MasteryTracker()
        self._aggregator = DueAggregator(
            self._parameter_model,
            review_threshold=self._config.review_threshold,
            mastery_threshold=self._config.mastery_threshold,
        )

    async def record_session(
        self,
        learner_id: str,
        events: Iterable[StudyEventDTO],
    ) -> SessionResult:
        """Apply a batch of answered items to every relevant track.

        Events are sorted by timestamp before being applied. Each track
        is loaded once, updated in order and saved once at the end, so an
        ordering violation leaves the store untouched.

        Args:
            learner_id: Learner ID
            events: Answered items, in any order

        Returns:
            SessionResult with counts and the updated states

        Raises:
            OrderingViolationError: If an event precedes its track's last update
        """
        result = SessionResult()
        tracks: dict[TrackKey, Track] = {}
        skills_cache: dict[str, list[str]] = {}
        params_cache: dict[str, ParameterSet] = {}

        for event in sorted(events, key=lambda e: e.occurred_at):
            skill_ids = await self._skills_for(event.item_id, skills_cache)
            if not skill_ids:
                result.events_skipped += 1
                logger.debug("event_skipped_no_skill", item_id=event.item_id)
                continue

            primary = await self._params_for(skill_ids[0], params_cache)
            item_track = await self._load_track(
                learner_id, TrackKey.item(event.item_id), primary, tracks
            )
            item_track.observe(event.correct, event.occurred_at)

            for skill_id in skill_ids:
                params = await self._params_for(skill_id, params_cache)
                skill_track = await self._load_track(
                    learner_id, TrackKey.skill(skill_id), params, tracks
                )
                skill_track.observe(event.correct, event.occurred_at)

            result.events_processed += 1
            if event.response_time_ms is not None:
                result.timed_events += 1
                result.total_response_time_ms += event.response_time_ms

        result.states = [track.to_dto() for track in tracks.values()]
        result.items_updated = sum(1 for key in tracks if key.kind == TrackKind.ITEM)
        result.skills_updated = len(tracks) - result.items_updated

        if result.states:
            await self._storage.save_states(learner_id, result.states)

        logger.info(
            "session_recorded",
            learner_id=learner_id,
            events_processed=result.events_processed,
            events_skipped=result.events_skipped,
            skills_updated=result.skills_updated,
            items_updated=result.items_updated,
            mean_response_time_ms=result.mean_response_time_ms,
        )
        return result

    async def due_report(
        self,
        learner_id: str,
        item_ids: Iterable[str],
        now: int | None = None,
        threshold: float | None = None,
    ) -> DueReportDTO:
        """Due status of item tracks, most overdue first.

        Items use their primary skill's parameters (defaults when the item
        has no skill). An item never answered falls back to its primary
        skill's estimate, anchored at now.

        Args:
            learner_id: Learner ID
            item_ids: Items to evaluate
            now: Evaluation time in epoch seconds (default: current time)
            threshold: Recall threshold (default: configured review threshold)

        Returns:
            DueReportDTO over item tracks
        """
        now = int(time.time()) if now is None else now
        skills_cache: dict[str, list[str]] = {}
        params_cache: dict[str, ParameterSet] = {}

        snapshots: list[SubjectSnapshot] = []
        for item_id in dict.fromkeys(item_ids):
            skill_ids = await self._skills_for(item_id, skills_cache)
            params = (
                await self._params_for(skill_ids[0], params_cache)
                if skill_ids
                else self._parameter_model.defaults
            )
            key = TrackKey.item(item_id)
            state = await self._storage.get_state(learner_id, key)
            if state is None:
                state = await self._unobserved_item_state(learner_id, key, skill_ids, params)
            snapshots.append(SubjectSnapshot(state=state, parameters=params))

        return self._aggregator.build_report(snapshots, now, threshold)

    async def skill_report(
        self,
        learner_id: str,
        skill_ids: Iterable[str],
        now: int | None = None,
        threshold: float | None = None,
    ) -> DueReportDTO:
        """Due status of skill tracks for aggregate reporting.

        Evaluated at the mastery threshold unless another is given.
        """
        now = int(time.time()) if now is None else now
        params_cache: dict[str, ParameterSet] = {}

        snapshots: list[SubjectSnapshot] = []
        for skill_id in dict.fromkeys(skill_ids):
            params = await self._params_for(skill_id, params_cache)
            key = TrackKey.skill(skill_id)
            state = await self._storage.get_state(learner_id, key)
            if state is None:
                state = Track.fresh(key, params).to_dto()
            snapshots.append(SubjectSnapshot(state=state, parameters=params))

        threshold = self._config.mastery_threshold if threshold is None else threshold
        return self._aggregator.build_report(snapshots, now, threshold)

    async def recommended_items(
        self,
        learner_id: str,
        item_ids: Iterable[str],
        now: int | None = None,
    ) -> list[str]:
        """Items due for review now at the review threshold, most overdue first."""
        report = await self.due_report(learner_id, item_ids, now=now)
        return report.due_subject_ids

    async def item_stats(
        self,
        histories: Mapping[str, Iterable[StudyEventDTO]],
        now: int | None = None,
        window_days: int | None = None,
    ) -> list[TrackStatsDTO]:
        """Per-item statistics rebuilt from stored answer histories.

        Each item's history is replayed from its primary skill's prior
        (defaults when the item has no skill), with same-second duplicates
        dropped. Stored states are not read.

        Args:
            histories: Answer history per item ID
            now: Evaluation time in epoch seconds (default: current time)
            window_days: Recent-activity window (default: configured window)

        Returns:
            One TrackStatsDTO per item, in input order
        """
        now = int(time.time()) if now is None else now
        window_days = self._config.stats_window_days if window_days is None else window_days
        skills_cache: dict[str, list[str]] = {}
        params_cache: dict[str, ParameterSet] = {}

        stats: list[TrackStatsDTO] = []
        for item_id, events in histories.items():
            skill_ids = await self._skills_for(item_id, skills_cache)
            params = (
                await self._params_for(skill_ids[0], params_cache)
                if skill_ids
                else self._parameter_model.defaults
            )
            stats.append(
                self._tracker.summarize(
                    TrackKey.item(item_id),
                    [event.observation_for(event.item_id) for event in events],
                    params,
                    now=now,
                    threshold=self._config.review_threshold,
                    window_days=window_days,
                )
            )

        logger.debug("item_stats_built", items=len(stats), window_days=window_days)
        return stats

    async def _unobserved_item_state(
        self,
        learner_id: str,
        key: TrackKey,
        skill_ids: list[str],
        params: ParameterSet,
    ) -> MasteryStateDTO:
        p_know = params.p_init
        if skill_ids:
            skill_state = await self._storage.get_state(learner_id, TrackKey.skill(skill_ids[0]))
            if skill_state is not None:
                p_know = skill_state.p_know
        return MasteryStateDTO(subject=key, p_know=p_know)

    async def _skills_for(self, item_id: str, cache: dict[str, list[str]]) -> list[str]:
        if item_id not in cache:
            skill_ids = await self._skill_resolver.skills_for_item(item_id)
            cache[item_id] = list(dict.fromkeys(skill_ids))
        return cache[item_id]

    async def _params_for(self, skill_id: str, cache: dict[str, ParameterSet]) -> ParameterSet:
        if skill_id not in cache:
            tuned = await self._storage.get_parameters(skill_id)
            if tuned is None:
                logger.debug("default_parameters_used", skill_id=skill_id)
            cache[skill_id] = self._parameter_model.resolve(tuned)
        return cache[skill_id]

    async def _load_track(
        self,
        learner_id: str,
        key: TrackKey,
        params: ParameterSet,
        tracks: dict[TrackKey, Track],
    ) -> Track:
        if key not in tracks:
            stored = await self._storage.get_state(learner_id, key)
            tracks[key] = (
                Track.fresh(key, params) if stored is None else Track.from_dto(stored, params)
            )
        return tracks[key]

    @property
    def aggregator(self) -> DueAggregator:
        return self._aggregator
