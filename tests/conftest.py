"""Shared test fixtures for mastery_trace.

This module provides pytest fixtures used across all tests.
"""

from unittest.mock import AsyncMock

import pytest
from mocks.mock_storage import InMemoryMasteryStorage, StaticSkillResolver

from mastery_trace.bkt.parameters import DEFAULT_PARAMETERS
from mastery_trace.config import BKTDefaultSettings, MasteryTraceConfig
from mastery_trace.models.mastery import MasteryStateDTO, TrackKey
from mastery_trace.models.observation import ObservationDTO, StudyEventDTO
from mastery_trace.models.parameters import ParameterSet

DAY = 86400
T0 = 1704067200  # 2024-01-01T00:00:00Z


# Mock fixtures
@pytest.fixture
def mock_storage() -> AsyncMock:
    """Create mock storage interface."""
    storage = AsyncMock()
    storage.get_state.return_value = None
    storage.get_parameters.return_value = None
    storage.save_states.return_value = None
    return storage


@pytest.fixture
def mock_resolver() -> AsyncMock:
    """Create mock skill resolver mapping every item to one skill."""
    resolver = AsyncMock()
    resolver.skills_for_item.return_value = ["algebra"]
    return resolver


@pytest.fixture
def memory_storage(tuned_parameters: ParameterSet) -> InMemoryMasteryStorage:
    """In-memory store with tuned parameters for 'algebra' only."""
    return InMemoryMasteryStorage(parameters={"algebra": tuned_parameters})


@pytest.fixture
def skill_resolver() -> StaticSkillResolver:
    """Resolver with explicit, multi-skill, inherited and unmapped items."""
    return StaticSkillResolver(
        item_skills={
            "card-1": ["algebra"],
            "card-2": ["algebra", "geometry"],
        },
        default_skill="geometry",
        inheriting_items={"card-3"},
    )


@pytest.fixture
def config() -> MasteryTraceConfig:
    """Configuration with explicit defaults, independent of the environment."""
    return MasteryTraceConfig(
        bkt=BKTDefaultSettings(
            p_init=0.20,
            p_transit=0.10,
            slip=0.10,
            guess=0.18,
            forget=0.01,
        ),
        review_threshold=0.72,
        mastery_threshold=0.95,
    )


# Sample data fixtures
@pytest.fixture
def default_parameters() -> ParameterSet:
    return DEFAULT_PARAMETERS


@pytest.fixture
def tuned_parameters() -> ParameterSet:
    """Tuned parameters distinct from the defaults."""
    return ParameterSet(p_init=0.30, p_transit=0.15, slip=0.05, guess=0.25, forget=0.02)


@pytest.fixture
def no_decay_parameters() -> ParameterSet:
    return ParameterSet(p_init=0.20, p_transit=0.10, slip=0.10, guess=0.18, forget=None)


@pytest.fixture
def skill_key() -> TrackKey:
    return TrackKey.skill("algebra")


@pytest.fixture
def fresh_state(skill_key: TrackKey) -> MasteryStateDTO:
    """State at p_init, never observed."""
    return MasteryStateDTO(subject=skill_key, p_know=0.20)


@pytest.fixture
def observed_state(skill_key: TrackKey) -> MasteryStateDTO:
    """State last updated at T0."""
    return MasteryStateDTO(
        subject=skill_key,
        p_know=0.90,
        last_updated_at=T0,
        observation_count=4,
    )


@pytest.fixture
def sample_observation() -> ObservationDTO:
    return ObservationDTO(subject_id="algebra", correct=True, occurred_at=T0)


@pytest.fixture
def sample_events() -> list[StudyEventDTO]:
    """A session submitted out of arrival order."""
    return [
        StudyEventDTO(item_id="card-2", correct=False, occurred_at=T0 + 120),
        StudyEventDTO(item_id="card-1", correct=True, occurred_at=T0),
        StudyEventDTO(item_id="card-4", correct=True, occurred_at=T0 + 60),
        StudyEventDTO(item_id="card-3", correct=True, occurred_at=T0 + 180),
    ]
