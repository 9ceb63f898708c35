"""
Shared pytest fixtures: fakes of every port and a ready-to-start runtime.
"""
import pytest

from application.session import SessionRuntime
from domain.models import Modifier

from tests.fakes import (
    FakeExecutionRepository,
    FakeExerciseCatalog,
    FakeModifierCatalog,
    FakeRatingService,
    FakeSequenceRepository,
    ManualClock,
    RecordingNotifier,
    make_sequence,
)

USER_ID = "user-1"


@pytest.fixture
def sequence_repo() -> FakeSequenceRepository:
    repo = FakeSequenceRepository()
    repo.seed([make_sequence()], user_id=USER_ID)
    return repo


@pytest.fixture
def execution_repo() -> FakeExecutionRepository:
    return FakeExecutionRepository()


@pytest.fixture
def exercise_catalog() -> FakeExerciseCatalog:
    return FakeExerciseCatalog()


@pytest.fixture
def modifier_catalog() -> FakeModifierCatalog:
    catalog = FakeModifierCatalog()
    catalog.seed(
        [
            Modifier(id=7, name="Weighted Vest", value=10, unit="kg"),
            Modifier(id=8, name="Band", value=2, unit="level"),
        ],
        user_id=USER_ID,
    )
    return catalog


@pytest.fixture
def rating_service() -> FakeRatingService:
    return FakeRatingService()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def runtime(
    sequence_repo,
    execution_repo,
    modifier_catalog,
    rating_service,
    notifier,
    clock,
) -> SessionRuntime:
    """Unstarted runtime wired to fakes, with a manual time source."""
    return SessionRuntime(
        user_id=USER_ID,
        sequence_repo=sequence_repo,
        execution_repo=execution_repo,
        modifier_catalog=modifier_catalog,
        rating_service=rating_service,
        notifier=notifier,
        beep_start_seconds=3,
        time_source=clock,
    )
