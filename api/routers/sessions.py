"""
Sessions router: drive a live workout session.

Every action returns the TransitionResult of the runtime plus the fresh
session state. Illegal or stale actions are answered with ``applied: false``
and a reason (HTTP 200); only unknown sessions, sequence lookup failures and a
full registry are HTTP errors.

Routes are async so the registry stays on the event loop; runtime calls go
through the threadpool because they may block on Supabase.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from api.deps import (
    RuntimeFactory,
    get_current_user,
    get_runtime_factory,
    get_session_registry,
)
from api.schemas.sessions import (
    CompleteBoutRequest,
    ConfigPreviewResponse,
    ConfigUpdateRequest,
    FinishSessionRequest,
    InsertBoutRequest,
    RewindRequest,
    SessionStateResponse,
    StartSessionRequest,
    TransitionRequest,
    TransitionResponse,
)
from application.errors import (
    EmptySequence,
    PersistenceError,
    SequenceAccessDenied,
    SequenceNotFound,
    SessionError,
    SessionLimitReached,
    SessionNotFound,
)
from application.session import SessionRegistry, SessionRuntime, TransitionResult
from domain.execution import UpdateScope

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
)


# =============================================================================
# Helpers
# =============================================================================


def _http_error(error: SessionError) -> HTTPException:
    """Map engine errors to HTTP errors."""
    if isinstance(error, (SequenceNotFound, SessionNotFound)):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, SequenceAccessDenied):
        return HTTPException(status_code=403, detail=error.message)
    if isinstance(error, EmptySequence):
        return HTTPException(status_code=422, detail=error.message)
    if isinstance(error, SessionLimitReached):
        return HTTPException(status_code=429, detail=error.message)
    if isinstance(error, PersistenceError):
        return HTTPException(status_code=502, detail=error.message)
    return HTTPException(status_code=400, detail=error.message)


def _lookup(registry: SessionRegistry, execution_id: str, user_id: str) -> SessionRuntime:
    try:
        return registry.get(execution_id, user_id)
    except SessionNotFound as e:
        raise _http_error(e)


def _state(runtime: SessionRuntime) -> SessionStateResponse:
    snapshot = runtime.snapshot()
    return SessionStateResponse(
        snapshot=snapshot,
        bout_statuses=runtime.bout_statuses(),
        group=runtime.group_context(snapshot.cursor) if snapshot.current_bout else None,
    )


async def _respond(
    registry: SessionRegistry,
    runtime: SessionRuntime,
    action: Callable[..., TransitionResult],
    *args,
    **kwargs,
) -> TransitionResponse:
    """Run ``action`` in the threadpool and drop the session once it is closed."""

    def run() -> TransitionResponse:
        result = action(*args, **kwargs)
        return TransitionResponse.from_result(result, state=_state(runtime))

    response = await run_in_threadpool(run)
    await registry.release_if_closed(runtime)
    return response


# =============================================================================
# Lifecycle
# =============================================================================


@router.post("", response_model=TransitionResponse)
async def start_session(
    request: StartSessionRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
    build_runtime: RuntimeFactory = Depends(get_runtime_factory),
):
    """Start a session on one of the user's sequences."""
    runtime = build_runtime(user_id)
    try:
        await registry.start(runtime, request.sequence_id)
    except SessionError as e:
        logger.warning(f"Could not start sequence {request.sequence_id} for {user_id}: {e.message}")
        raise _http_error(e)

    result = TransitionResult(
        applied=True,
        status=runtime.status,
        cursor=runtime.cursor,
        version=runtime.version,
    )
    state = await run_in_threadpool(_state, runtime)
    return TransitionResponse.from_result(result, state=state)


@router.get("/{execution_id}", response_model=SessionStateResponse)
async def get_session_state(
    execution_id: str,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Current snapshot, per-bout statuses and group context."""
    runtime = _lookup(registry, execution_id, user_id)
    return await run_in_threadpool(_state, runtime)


@router.post("/{execution_id}/pause", response_model=TransitionResponse)
async def pause_session(
    execution_id: str,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.pause)


@router.post("/{execution_id}/resume", response_model=TransitionResponse)
async def resume_session(
    execution_id: str,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.resume)


@router.post("/{execution_id}/quit", response_model=TransitionResponse)
async def quit_session(
    execution_id: str,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """
    Abandon the session, saving the bouts completed so far.

    When the save fails the session stays registered so it can be retried
    with POST /sessions/{execution_id}/flush.
    """
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.quit)


@router.post("/{execution_id}/flush", response_model=TransitionResponse)
async def retry_flush(
    execution_id: str,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Retry a failed end-of-session save."""
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.retry_flush)


@router.post("/{execution_id}/finish", response_model=TransitionResponse)
async def finish_session(
    execution_id: str,
    request: FinishSessionRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Rate a completed session and return any personal records."""
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.finish, request.rating, request.feedback)


@router.post("/{execution_id}/dismiss", response_model=TransitionResponse)
async def dismiss_session(
    execution_id: str,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Close a completed session without rating it."""
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.dismiss)


# =============================================================================
# Bout Transitions
# =============================================================================


@router.post("/{execution_id}/complete", response_model=TransitionResponse)
async def complete_bout(
    execution_id: str,
    request: CompleteBoutRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(
        registry,
        runtime,
        runtime.complete,
        value=request.value,
        expected_cursor=request.expected_cursor,
    )


@router.post("/{execution_id}/skip", response_model=TransitionResponse)
async def skip_bout(
    execution_id: str,
    request: TransitionRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.skip, expected_cursor=request.expected_cursor)


@router.post("/{execution_id}/back", response_model=TransitionResponse)
async def go_back(
    execution_id: str,
    request: TransitionRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.go_back, expected_cursor=request.expected_cursor)


@router.post("/{execution_id}/rewind", response_model=TransitionResponse)
async def rewind(
    execution_id: str,
    request: RewindRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(
        registry,
        runtime,
        runtime.rewind_to,
        request.index,
        expected_cursor=request.expected_cursor,
    )


# =============================================================================
# Mid-session Edits
# =============================================================================


@router.post("/{execution_id}/bouts", response_model=TransitionResponse)
async def insert_bout(
    execution_id: str,
    request: InsertBoutRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Insert a bout right after the current one."""
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(
        registry, runtime, runtime.insert_bout, request.bout, persist=request.persist
    )


@router.get("/{execution_id}/config/preview", response_model=ConfigPreviewResponse)
async def preview_config_update(
    execution_id: str,
    target_index: int,
    scope: UpdateScope = UpdateScope.THIS_ONLY,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Which bouts a config change would touch."""
    runtime = _lookup(registry, execution_id, user_id)
    indices = await run_in_threadpool(runtime.preview_config_update, target_index, scope)
    return ConfigPreviewResponse(indices=indices)


@router.patch("/{execution_id}/config", response_model=TransitionResponse)
async def apply_config_update(
    execution_id: str,
    request: ConfigUpdateRequest,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(
        registry,
        runtime,
        runtime.apply_config_update,
        request.target_index,
        request.scope,
        measure=request.measure,
        target_value=request.target_value,
        persist=request.persist,
    )


@router.post("/{execution_id}/modifiers/{modifier_id}/toggle", response_model=TransitionResponse)
async def toggle_modifier(
    execution_id: str,
    modifier_id: int,
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
):
    runtime = _lookup(registry, execution_id, user_id)
    return await _respond(registry, runtime, runtime.toggle_modifier, modifier_id)
