"""
Pydantic models for the session API.

Requests carry an optional ``expected_cursor`` so a client can tie an action
to the bout it was looking at; a stale action is ignored rather than applied
to the next bout.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from application.session import TransitionResult
from domain.execution import UpdateScope
from domain.models import (
    Bout,
    BoutStatus,
    GroupContext,
    MeasureType,
    PersonalRecord,
    SessionSnapshot,
)


class StartSessionRequest(BaseModel):
    """Start a session on a sequence"""
    sequence_id: str = Field(..., min_length=1)


class TransitionRequest(BaseModel):
    """Complete, skip or go back"""
    expected_cursor: Optional[int] = Field(default=None, ge=0)


class CompleteBoutRequest(TransitionRequest):
    """Complete the current bout with an optional explicit value"""
    value: Optional[int] = Field(
        default=None,
        ge=0,
        description="Seconds for timed bouts, reps for repetition bouts",
    )


class RewindRequest(TransitionRequest):
    """Redo from an earlier bout"""
    index: int = Field(..., ge=0)


class InsertBoutRequest(BaseModel):
    """Insert a bout right after the current one"""
    bout: Bout
    persist: bool = Field(default=False, description="Also save to the sequence")


class ConfigUpdateRequest(BaseModel):
    """Change measure/target on one or more bouts"""
    target_index: int = Field(..., ge=0)
    scope: UpdateScope = UpdateScope.THIS_ONLY
    measure: Optional[MeasureType] = None
    target_value: Optional[int] = Field(default=None, ge=0)
    persist: bool = False


class ConfigPreviewResponse(BaseModel):
    """Indices a config change would touch"""
    indices: List[int]


class FinishSessionRequest(BaseModel):
    """Rate a completed session"""
    rating: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = Field(default=None, max_length=1000)


class SessionStateResponse(BaseModel):
    """Snapshot plus derived progress details"""
    snapshot: SessionSnapshot
    bout_statuses: List[BoutStatus] = Field(default_factory=list)
    group: Optional[GroupContext] = None


class TransitionResponse(BaseModel):
    """Outcome of a session action"""
    applied: bool
    status: str
    cursor: int
    version: int
    reason: Optional[str] = None
    persisted: Optional[bool] = None
    error: Optional[str] = None
    indices: List[int] = Field(default_factory=list)
    personal_records: List[PersonalRecord] = Field(default_factory=list)
    state: Optional[SessionStateResponse] = None

    @classmethod
    def from_result(
        cls,
        result: TransitionResult,
        state: Optional[SessionStateResponse] = None,
    ) -> "TransitionResponse":
        return cls(
            applied=result.applied,
            status=result.status.value,
            cursor=result.cursor,
            version=result.version,
            reason=result.reason,
            persisted=result.persisted,
            error=result.error,
            indices=result.indices,
            personal_records=result.personal_records,
            state=state,
        )


class SequenceDurationResponse(BaseModel):
    """Estimated duration of a sequence"""
    sequence_id: str
    total_seconds: int
    total_minutes: int
    formatted: str
