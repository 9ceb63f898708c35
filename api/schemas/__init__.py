"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- sessions: Session and sequence duration models
"""

from api.schemas.sessions import (
    CompleteBoutRequest,
    ConfigPreviewResponse,
    ConfigUpdateRequest,
    FinishSessionRequest,
    InsertBoutRequest,
    RewindRequest,
    SequenceDurationResponse,
    SessionStateResponse,
    StartSessionRequest,
    TransitionRequest,
    TransitionResponse,
)

__all__ = [
    "CompleteBoutRequest",
    "ConfigPreviewResponse",
    "ConfigUpdateRequest",
    "FinishSessionRequest",
    "InsertBoutRequest",
    "RewindRequest",
    "SequenceDurationResponse",
    "SessionStateResponse",
    "StartSessionRequest",
    "TransitionRequest",
    "TransitionResponse",
]
