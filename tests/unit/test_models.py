"""Unit tests for mastery_trace models."""

import math

import pytest
from pydantic import ValidationError

from mastery_trace.models.due import DueReportDTO, DueResultDTO
from mastery_trace.models.mastery import MasteryStateDTO, TrackKey, TrackKind
from mastery_trace.models.observation import ObservationDTO, StudyEventDTO
from mastery_trace.models.parameters import GUESS_SLIP_MARGIN, ParameterSet


class TestParameterSet:
    """Tests for ParameterSet model."""

    def test_defaults(self) -> None:
        params = ParameterSet()
        assert params.p_init == 0.20
        assert params.p_transit == 0.10
        assert params.slip == 0.10
        assert params.guess == 0.18
        assert params.forget == 0.01
        assert params.schema_version == 1

    def test_out_of_range_values_are_clamped(self) -> None:
        params = ParameterSet(p_init=0.9, p_transit=-1.0, slip=0.5, guess=0.7, forget=0.3)
        assert params.p_init == 0.50
        assert params.p_transit == 0.0
        assert params.slip == 0.30
        assert params.guess == 0.40
        assert params.forget == 0.05

    def test_negative_forget_clamped_to_zero(self) -> None:
        params = ParameterSet(forget=-0.2)
        assert params.forget == 0.0
        assert params.decays is False

    def test_forget_none_passes_through(self) -> None:
        params = ParameterSet(forget=None)
        assert params.forget is None
        assert params.decays is False

    def test_non_finite_clamps_to_lower_bound(self) -> None:
        params = ParameterSet(p_init=math.nan, slip=math.inf)
        assert params.p_init == 0.0
        assert params.slip == 0.0

    @pytest.mark.parametrize("slip", [0.0, 0.1, 0.3])
    @pytest.mark.parametrize("guess", [0.0, 0.2, 0.4, 0.9])
    def test_guess_below_one_minus_slip(self, slip: float, guess: float) -> None:
        params = ParameterSet(slip=slip, guess=guess)
        assert params.guess < 1.0 - params.slip - GUESS_SLIP_MARGIN

    @pytest.mark.parametrize("field", ["slip", "guess", "p_init"])
    def test_missing_value_is_validation_error(self, field: str) -> None:
        with pytest.raises(ValidationError):
            ParameterSet(**{field: None})

    def test_non_numeric_value_is_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            ParameterSet(slip="often")  # type: ignore[arg-type]

    def test_numeric_strings_are_clamped(self) -> None:
        params = ParameterSet(slip="0.9")  # type: ignore[arg-type]
        assert params.slip == 0.30

    def test_frozen_model(self) -> None:
        params = ParameterSet()
        with pytest.raises(ValidationError):
            params.slip = 0.2  # type: ignore[misc]


class TestTrackKey:
    """Tests for TrackKey model."""

    def test_constructors(self) -> None:
        assert TrackKey.skill("algebra").kind == TrackKind.SKILL
        assert TrackKey.item("card-1").kind == TrackKind.ITEM

    def test_str(self) -> None:
        assert str(TrackKey.skill("algebra")) == "skill:algebra"

    def test_item_and_skill_keys_differ(self) -> None:
        assert TrackKey.skill("x") != TrackKey.item("x")
        assert len({TrackKey.skill("x"), TrackKey.item("x"), TrackKey.skill("x")}) == 2

    def test_empty_subject_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TrackKey(kind=TrackKind.SKILL, subject_id="")


class TestMasteryStateDTO:
    """Tests for MasteryStateDTO model."""

    def test_fresh_state(self) -> None:
        state = MasteryStateDTO(subject=TrackKey.skill("algebra"), p_know=0.2)
        assert state.last_updated_at is None
        assert state.observation_count == 0
        assert state.observed is False

    def test_p_know_range(self) -> None:
        with pytest.raises(ValidationError):
            MasteryStateDTO(subject=TrackKey.skill("algebra"), p_know=1.2)
        with pytest.raises(ValidationError):
            MasteryStateDTO(subject=TrackKey.skill("algebra"), p_know=-0.1)


class TestObservationDTO:
    """Tests for observation models."""

    def test_valid_observation(self) -> None:
        obs = ObservationDTO(subject_id="algebra", correct=True, occurred_at=1704067200)
        assert obs.correct is True
        assert obs.schema_version == 1

    def test_negative_timestamp_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ObservationDTO(subject_id="algebra", correct=True, occurred_at=-5)

    def test_malformed_timestamp_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ObservationDTO(
                subject_id="algebra",
                correct=True,
                occurred_at="yesterday",  # type: ignore[arg-type]
            )

    def test_event_fans_out_to_observation(self) -> None:
        event = StudyEventDTO(item_id="card-1", correct=False, occurred_at=1704067200)
        obs = event.observation_for("algebra")
        assert obs.subject_id == "algebra"
        assert obs.correct is False
        assert obs.occurred_at == 1704067200


class TestDueReportDTO:
    """Tests for due report models."""

    def test_ranked_and_due_ids(self) -> None:
        due = DueResultDTO(
            subject=TrackKey.item("a"),
            p_know=0.3,
            next_review_at=100,
            interval_days=0,
            due_in_seconds=-50,
        )
        later = DueResultDTO(
            subject=TrackKey.item("b"),
            p_know=0.9,
            next_review_at=500,
            interval_days=3,
            due_in_seconds=350,
        )
        report = DueReportDTO(evaluated_at=150, threshold=0.72, due=[due], not_yet_due=[later])

        assert due.is_due is True
        assert later.is_due is False
        assert report.due_subject_ids == ["a"]
        assert [r.subject.subject_id for r in report.ranked] == ["a", "b"]

    def test_threshold_range(self) -> None:
        with pytest.raises(ValidationError):
            DueReportDTO(evaluated_at=0, threshold=0.0)
