"""
Sequences router: read-only views of authored sequences and the catalogs
used by the insert-bout and modifier pickers.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.deps import (
    get_current_user,
    get_exercise_catalog,
    get_modifier_catalog,
    get_sequence_repo,
)
from api.schemas.sessions import SequenceDurationResponse
from application.errors import SequenceAccessDenied
from application.ports import ExerciseCatalog, ModifierCatalog, SequenceRepository
from domain.models import CatalogExercise, Modifier, Sequence

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Sequences"],
)


def _load_sequence(repo: SequenceRepository, sequence_id: str, user_id: str) -> Sequence:
    try:
        sequence = repo.get_sequence(sequence_id, user_id)
    except SequenceAccessDenied as e:
        raise HTTPException(status_code=403, detail=e.message)
    if sequence is None:
        raise HTTPException(status_code=404, detail=f"Sequence '{sequence_id}' not found")
    return sequence


@router.get("/sequences/{sequence_id}", response_model=Sequence)
def get_sequence(
    sequence_id: str,
    user_id: str = Depends(get_current_user),
    sequence_repo: SequenceRepository = Depends(get_sequence_repo),
):
    """Get an authored sequence with its bouts and groups."""
    return _load_sequence(sequence_repo, sequence_id, user_id)


@router.get("/sequences/{sequence_id}/duration", response_model=SequenceDurationResponse)
def get_sequence_duration(
    sequence_id: str,
    user_id: str = Depends(get_current_user),
    sequence_repo: SequenceRepository = Depends(get_sequence_repo),
):
    """Estimated duration from the targets of timed bouts."""
    duration = _load_sequence(sequence_repo, sequence_id, user_id).estimated_duration()
    return SequenceDurationResponse(
        sequence_id=sequence_id,
        total_seconds=duration.total_seconds,
        total_minutes=duration.total_minutes,
        formatted=duration.formatted,
    )


@router.get("/exercises", response_model=List[CatalogExercise])
def list_exercises(
    user_id: str = Depends(get_current_user),
    catalog: ExerciseCatalog = Depends(get_exercise_catalog),
):
    """Exercises available to the user, for the insert-bout picker."""
    return catalog.list_exercises(user_id)


@router.get("/modifiers", response_model=List[Modifier])
def list_modifiers(
    user_id: str = Depends(get_current_user),
    catalog: ModifierCatalog = Depends(get_modifier_catalog),
):
    """Equipment modifiers owned by the user."""
    return catalog.list_modifiers(user_id)
