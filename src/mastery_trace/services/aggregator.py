"""Due-status aggregator for mastery_trace.

Computes the due status of many tracks at once, ranks them by urgency
and splits them into due and not-yet-due. Performs no mutation and no
persistence.
"""

from collections.abc import Iterable

from mastery_trace.bkt.parameters import ParameterModel
from mastery_trace.bkt.schedule import next_review, validate_threshold
from mastery_trace.logging import get_logger
from mastery_trace.models.due import DueReportDTO, DueResultDTO, SubjectSnapshot

__all__ = [
    "DEFAULT_MASTERY_THRESHOLD",
    "DEFAULT_REVIEW_THRESHOLD",
    "DueAggregator",
]

logger = get_logger(__name__)

DEFAULT_REVIEW_THRESHOLD = 0.72
DEFAULT_MASTERY_THRESHOLD = 0.95


class DueAggregator:
    """Ranks subjects by how overdue their next review is.

    Each subject is scheduled from its last update (or from the
    evaluation time if never observed), then results are sorted by
    due instant relative to now, most overdue first.

    Example:
        aggregator = DueAggregator(ParameterModel(defaults))
        report = aggregator.build_report(snapshots, now=now)
        for result in report.due:
            ...
    """

    def __init__(
        self,
        parameter_model: ParameterModel | None = None,
        review_threshold: float = DEFAULT_REVIEW_THRESHOLD,
        mastery_threshold: float = DEFAULT_MASTERY_THRESHOLD,
    ) -> None:
        """Initialize aggregator.

        Args:
            parameter_model: Resolves defaults for subjects without tuned parameters
            review_threshold: Recall threshold used when none is passed per call
            mastery_threshold: p_know at or above which a subject counts as mastered
        """
        self._parameter_model = parameter_model or ParameterModel()
        self._review_threshold = validate_threshold(review_threshold)
        self._mastery_threshold = validate_threshold(mastery_threshold)

    def evaluate(
        self,
        snapshot: SubjectSnapshot,
        now: int,
        threshold: float | None = None,
    ) -> DueResultDTO:
        """Compute due status for one subject."""
        threshold = self._review_threshold if threshold is None else threshold
        params = self._parameter_model.resolve(snapshot.parameters)
        state = snapshot.state
        anchor = now if state.last_updated_at is None else state.last_updated_at

        schedule = next_review(state.p_know, params, threshold, anchor)
        return DueResultDTO(
            subject=state.subject,
            p_know=state.p_know,
            next_review_at=schedule.next_review_at,
            interval_days=schedule.interval_days,
            due_in_seconds=schedule.next_review_at - now,
            mastered=state.p_know >= self._mastery_threshold,
        )

    def build_report(
        self,
        subjects: Iterable[SubjectSnapshot],
        now: int,
        threshold: float | None = None,
    ) -> DueReportDTO:
        """Rank subjects by urgency and split into due / not yet due.

        Ties on due instant are broken by lower p_know, then subject id.

        Args:
            subjects: Current state and parameters per subject
            now: Evaluation time in epoch seconds
            threshold: Recall threshold (default: the configured review threshold)

        Returns:
            DueReportDTO with both partitions sorted most urgent first
        """
        threshold = validate_threshold(
            self._review_threshold if threshold is None else threshold
        )
        results = [self.evaluate(snapshot, now, threshold) for snapshot in subjects]
        results.sort(key=lambda r: (r.due_in_seconds, r.p_know, r.subject.subject_id))

        due = [r for r in results if r.is_due]
        not_yet_due = [r for r in results if not r.is_due]

        logger.debug(
            "due_report_built",
            subjects=len(results),
            due=len(due),
            threshold=threshold,
        )

        return DueReportDTO(
            evaluated_at=now,
            threshold=threshold,
            due=due,
            not_yet_due=not_yet_due,
            mastered_count=sum(1 for r in results if r.mastered),
            next_due_at=not_yet_due[0].next_review_at if not_yet_due else None,
        )

    @property
    def review_threshold(self) -> float:
        return self._review_threshold

    @property
    def mastery_threshold(self) -> float:
        return self._mastery_threshold
