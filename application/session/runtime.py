"""
Session Runtime: the workout execution state machine.

Owns the session-local copy of the bout list, the cursor, the completed-bout
log and the per-bout clock and modifier state, and orchestrates the clock,
auto-advance policy, modifier tracker and scope resolver.

States:
    not_started -> running <-> paused -> completed
    running / paused -> quit

Failure semantics:
- start() is the only operation that raises (SequenceNotFound,
  SequenceAccessDenied, EmptySequence, PersistenceError from the execution
  store).
- Every other operation returns a TransitionResult. Illegal calls (wrong
  state, stale cursor, nothing to do) come back with ``applied=False`` and a
  reason; UI actions can race, so these are expected.
- Store failures after start are reported on the result (``persisted=False``)
  and leave in-memory state untouched. The completed log is kept until a flush
  succeeds.

All state is held in immutable tuples that are replaced on write, so
snapshots handed to presenters never change under them.

Public methods hold a per-session re-entrant lock: request handlers run them
in worker threads while the ticker drives the same runtime.
"""

import functools
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from application.errors import EmptySequence, PersistenceError, SequenceNotFound
from application.ports import (
    ExecutionRepository,
    ModifierCatalog,
    RatingService,
    SequenceRepository,
    SessionEvent,
    SessionEventType,
    SessionNotifier,
)
from domain.execution import modifiers as modifier_tracker
from domain.execution.clock import ExecutionClock
from domain.execution.policy import CueTracker, should_advance
from domain.execution.scope import UpdateScope, apply_config, resolve_scope
from domain.models import (
    Bout,
    BoutGroup,
    BoutStatus,
    CompletedBout,
    GoalMode,
    GroupContext,
    MeasureType,
    Modifier,
    PersonalRecord,
    SessionSnapshot,
    SessionStatus,
    find_group,
    prune_groups,
)

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

SnapshotListener = Callable[[SessionSnapshot], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def synchronized(method):
    """Run a runtime method under the session lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


@dataclass
class TransitionResult:
    """Outcome of one runtime operation."""

    applied: bool
    status: SessionStatus
    cursor: int
    version: int
    reason: Optional[str] = None
    persisted: Optional[bool] = None
    error: Optional[str] = None
    indices: List[int] = field(default_factory=list)
    personal_records: List[PersonalRecord] = field(default_factory=list)


@dataclass
class TickResult:
    """What one tick observed and did."""

    elapsed_seconds: int = 0
    cue: Optional[int] = None
    advanced: bool = False


class SessionRuntime:
    """
    State machine for a single workout session.

    Dependencies are injected via constructor for testability. Every operation
    accepts an explicit ``now``; when omitted the injected time source is used.

    Usage:
        >>> runtime = SessionRuntime(
        ...     user_id="user-1",
        ...     sequence_repo=sequence_repo,
        ...     execution_repo=execution_repo,
        ...     modifier_catalog=modifier_catalog,
        ...     rating_service=rating_service,
        ... )
        >>> runtime.start("seq-1", now=t0)
        >>> runtime.complete(now=t0 + timedelta(seconds=31))
        >>> runtime.snapshot().cursor
        1
    """

    def __init__(
        self,
        *,
        user_id: str,
        sequence_repo: SequenceRepository,
        execution_repo: ExecutionRepository,
        modifier_catalog: ModifierCatalog,
        rating_service: RatingService,
        notifier: Optional[SessionNotifier] = None,
        beep_start_seconds: int = 3,
        time_source: Callable[[], datetime] = utc_now,
    ) -> None:
        self._user_id = user_id
        self._sequence_repo = sequence_repo
        self._execution_repo = execution_repo
        self._modifier_catalog = modifier_catalog
        self._rating_service = rating_service
        self._notifier = notifier
        self._time_source = time_source
        self._lock = threading.RLock()

        self._status = SessionStatus.NOT_STARTED
        self._execution_id: Optional[str] = None
        self._sequence_id: Optional[str] = None
        self._goal = GoalMode.ELASTIC
        self._available_modifiers: Tuple[int, ...] = ()
        self._modifiers_by_id: Dict[int, Modifier] = {}

        self._bouts: Tuple[Bout, ...] = ()
        self._groups: Tuple[BoutGroup, ...] = ()
        self._cursor = 0
        self._log: Tuple[CompletedBout, ...] = ()
        self._clock: Optional[ExecutionClock] = None
        self._session_pause_seconds = 0.0
        self._active_modifiers: FrozenSet[int] = frozenset()
        self._cues = CueTracker(beep_start_seconds=beep_start_seconds)

        self._version = 0
        self._pending_flush_at: Optional[datetime] = None
        self._rating_submitted = False
        self._dismissed = False
        self._personal_records: Tuple[PersonalRecord, ...] = ()
        self._listeners: List[SnapshotListener] = []

    # =========================================================================
    # Read model
    # =========================================================================

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def execution_id(self) -> Optional[str]:
        return self._execution_id

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def version(self) -> int:
        return self._version

    @property
    def bouts(self) -> Tuple[Bout, ...]:
        return self._bouts

    @property
    def groups(self) -> Tuple[BoutGroup, ...]:
        return self._groups

    @property
    def completed_log(self) -> Tuple[CompletedBout, ...]:
        return self._log

    @property
    def active_modifiers(self) -> FrozenSet[int]:
        return self._active_modifiers

    @property
    def total_pause_seconds(self) -> float:
        """Closed pause time across the whole session."""
        return self._session_pause_seconds

    @property
    def pending_flush(self) -> bool:
        return self._pending_flush_at is not None

    @property
    def rating_submitted(self) -> bool:
        return self._rating_submitted

    @property
    def is_closed(self) -> bool:
        """True once nothing further can happen to this session."""
        if self._status == SessionStatus.QUIT:
            return not self.pending_flush
        return self._status == SessionStatus.COMPLETED and (
            self._rating_submitted or self._dismissed
        )

    @property
    def current_bout(self) -> Optional[Bout]:
        if not self._status.is_active:
            return None
        return self._bouts[self._cursor]

    def elapsed_seconds(self, now: Optional[datetime] = None) -> int:
        if self._clock is None or not self._status.is_active:
            return 0
        return self._clock.elapsed_seconds(self._resolve_now(now))

    @synchronized
    def snapshot(self, now: Optional[datetime] = None) -> SessionSnapshot:
        """Frozen view of the session at ``now``."""
        current = self.current_bout
        return SessionSnapshot(
            execution_id=self._execution_id,
            sequence_id=self._sequence_id,
            status=self._status,
            goal=self._goal,
            version=self._version,
            cursor=self._cursor,
            bouts=self._bouts,
            groups=self._groups,
            completed_log=self._log,
            active_modifiers=tuple(sorted(self._active_modifiers)),
            toggleable_modifiers=tuple(sorted(
                modifier_tracker.toggleable(current, self._available_modifiers)
            )),
            elapsed_seconds=self.elapsed_seconds(now),
            bout_started_at=self._clock.started_at if self._clock and current else None,
            total_pause_seconds=self._session_pause_seconds,
            pending_flush=self.pending_flush,
            rating_submitted=self._rating_submitted,
        )

    @synchronized
    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a presenter callback, called with a snapshot after every
        applied transition.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @synchronized
    def bout_statuses(self) -> List[BoutStatus]:
        """Per-index status for a segmented progress bar."""
        statuses = []
        for index in range(len(self._bouts)):
            if index < len(self._log):
                entry = self._log[index]
                statuses.append(BoutStatus.SKIPPED if entry.skipped else BoutStatus.COMPLETED)
            elif index == self._cursor and self._status.is_active:
                statuses.append(BoutStatus.CURRENT)
            else:
                statuses.append(BoutStatus.PENDING)
        return statuses

    @synchronized
    def group_context(self, index: int) -> Optional[GroupContext]:
        """Group, 1-based position and size for the bout at ``index``."""
        if not 0 <= index < len(self._bouts):
            return None
        bout = self._bouts[index]
        group = find_group(self._groups, bout.id)
        if group is None:
            return None
        return GroupContext(group=group, position=group.position_of(bout.id), total=group.size)

    @synchronized
    def preview_config_update(self, target_index: int, scope: UpdateScope) -> List[int]:
        """Indices a config change at ``target_index`` would touch."""
        return resolve_scope(self._bouts, self._groups, target_index, scope, len(self._log))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @synchronized
    def start(self, sequence_id: str, now: Optional[datetime] = None) -> TransitionResult:
        """
        Start a session on a sequence.

        Raises:
            SequenceNotFound: the sequence is missing or deleted
            SequenceAccessDenied: the sequence belongs to another user
            EmptySequence: the sequence has no bouts
            PersistenceError: the execution record could not be created
        """
        if self._status != SessionStatus.NOT_STARTED:
            return self._reject("session already started")

        now = self._resolve_now(now)
        sequence = self._sequence_repo.get_sequence(sequence_id, self._user_id)
        if sequence is None:
            raise SequenceNotFound(sequence_id)
        if not sequence.bouts:
            raise EmptySequence(sequence_id)

        modifiers_by_id = {
            m.id: m for m in self._modifier_catalog.list_modifiers(self._user_id)
        }
        # Created last: a failed start must not leave an execution row
        execution_id = self._execution_repo.start_execution(sequence_id, self._user_id, now)

        bouts = self._tag_bouts(sequence.bouts)
        self._sequence_id = sequence_id
        self._execution_id = execution_id
        self._goal = GoalMode.resolve(sequence.goal)
        self._available_modifiers = tuple(sequence.available_modifiers)
        self._modifiers_by_id = modifiers_by_id
        self._bouts = bouts
        self._groups = prune_groups(sequence.groups, [b.id for b in bouts])
        self._cursor = 0
        self._log = ()
        self._session_pause_seconds = 0.0
        self._status = SessionStatus.RUNNING
        self._enter_bout(now)

        logger.info(
            f"Started session {execution_id} on sequence {sequence_id} "
            f"({len(bouts)} bouts, goal={self._goal.value})"
        )
        return self._commit()

    @synchronized
    def pause(self, now: Optional[datetime] = None) -> TransitionResult:
        if self._status != SessionStatus.RUNNING:
            return self._reject("session is not running")
        self._clock = self._clock.pause(self._resolve_now(now))
        self._status = SessionStatus.PAUSED
        return self._commit()

    @synchronized
    def resume(self, now: Optional[datetime] = None) -> TransitionResult:
        if self._status != SessionStatus.PAUSED:
            return self._reject("session is not paused")
        self._close_pause(self._resolve_now(now))
        self._status = SessionStatus.RUNNING
        return self._commit()

    @synchronized
    def quit(self, now: Optional[datetime] = None) -> TransitionResult:
        """
        Abandon the session, flushing exactly the bouts completed so far.

        Never raises; a failed flush is reported and can be retried.
        """
        if not self._status.is_active:
            return self._reject("session is not active")
        now = self._resolve_now(now)
        self._close_pause(now)
        self._status = SessionStatus.QUIT
        persisted, error = self._flush(now)
        logger.info(
            f"Session {self._execution_id} quit after {len(self._log)} bouts "
            f"(persisted={persisted})"
        )
        return self._commit(persisted=persisted, error=error)

    @synchronized
    def retry_flush(self, now: Optional[datetime] = None) -> TransitionResult:
        """Re-send an end-of-session flush that failed."""
        if not self.pending_flush:
            return self._reject("nothing to flush")
        persisted, error = self._flush(self._pending_flush_at)
        return self._result(applied=persisted, persisted=persisted, error=error)

    @synchronized
    def finish(
        self,
        rating: int,
        feedback: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TransitionResult:
        """
        Rate a completed session and collect its personal records.

        A pending end-of-session flush is retried first, so personal-record
        detection always sees the full log.
        """
        if self._status != SessionStatus.COMPLETED:
            return self._reject("session is not completed")
        if self._rating_submitted:
            return self._reject("rating already submitted")
        if self._dismissed:
            return self._reject("session already closed without rating")
        if not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            return self._reject(f"rating must be between {MIN_RATING} and {MAX_RATING}")

        if self.pending_flush:
            persisted, error = self._flush(self._pending_flush_at)
            if not persisted:
                return self._result(applied=False, persisted=False, error=error)

        try:
            records = self._rating_service.submit_rating(
                self._execution_id, self._user_id, rating, feedback
            )
        except PersistenceError as e:
            logger.warning(f"Rating for session {self._execution_id} failed: {e.message}")
            return self._result(applied=False, persisted=False, error=e.message)

        self._rating_submitted = True
        self._personal_records = tuple(records)
        logger.info(
            f"Session {self._execution_id} rated {rating} "
            f"({len(self._personal_records)} personal records)"
        )
        result = self._commit(persisted=True)
        result.personal_records = list(self._personal_records)
        return result

    @synchronized
    def dismiss(self, now: Optional[datetime] = None) -> TransitionResult:
        """
        Close a completed session without rating it.

        A pending end-of-session flush is retried first; the session stays
        open while its log is unsaved.
        """
        if self._status != SessionStatus.COMPLETED:
            return self._reject("session is not completed")
        if self._rating_submitted or self._dismissed:
            return self._reject("session already closed")

        if self.pending_flush:
            persisted, error = self._flush(self._pending_flush_at)
            if not persisted:
                return self._result(applied=False, persisted=False, error=error)

        self._dismissed = True
        logger.info(f"Session {self._execution_id} closed without rating")
        return self._commit(persisted=True)

    # =========================================================================
    # Bout transitions
    # =========================================================================

    @synchronized
    def complete(
        self,
        now: Optional[datetime] = None,
        value: Optional[int] = None,
        expected_cursor: Optional[int] = None,
    ) -> TransitionResult:
        """
        Record the current bout as done and move on.

        ``value`` defaults to elapsed whole seconds for timed bouts and to the
        target for repetition bouts.
        """
        rejection = self._guard_transition(expected_cursor)
        if rejection:
            return rejection
        if value is not None and value < 0:
            return self._reject("value cannot be negative")

        now = self._resolve_now(now)
        bout = self.current_bout
        if value is None:
            if bout.config.measure == MeasureType.TIME:
                value = self._clock.elapsed_seconds(now)
            else:
                value = bout.config.target_value

        record = CompletedBout.from_bout(
            bout,
            started_at=self._clock.started_at,
            completed_at=now,
            value=value,
            active_modifiers=modifier_tracker.to_active_modifiers(
                self._active_modifiers, bout, self._modifiers_by_id
            ),
        )
        return self._advance(record, now, SessionEventType.BOUT_COMPLETED)

    @synchronized
    def skip(
        self,
        now: Optional[datetime] = None,
        expected_cursor: Optional[int] = None,
    ) -> TransitionResult:
        """Record the current bout as skipped and move on."""
        rejection = self._guard_transition(expected_cursor)
        if rejection:
            return rejection

        now = self._resolve_now(now)
        record = CompletedBout.from_bout(
            self.current_bout,
            started_at=self._clock.started_at,
            completed_at=now,
            skipped=True,
        )
        return self._advance(record, now, SessionEventType.BOUT_SKIPPED)

    @synchronized
    def go_back(
        self,
        now: Optional[datetime] = None,
        expected_cursor: Optional[int] = None,
    ) -> TransitionResult:
        """Step back one bout, dropping its log entry."""
        rejection = self._guard_transition(expected_cursor)
        if rejection:
            return rejection
        if self._cursor == 0:
            return self._reject("already at the first bout")
        return self._rewind(self._cursor - 1, self._resolve_now(now))

    @synchronized
    def rewind_to(
        self,
        index: int,
        now: Optional[datetime] = None,
        expected_cursor: Optional[int] = None,
    ) -> TransitionResult:
        """Redo from an earlier bout, dropping every log entry from ``index`` on."""
        rejection = self._guard_transition(expected_cursor)
        if rejection:
            return rejection
        if not 0 <= index < self._cursor:
            return self._reject("can only rewind to an earlier bout")
        return self._rewind(index, self._resolve_now(now))

    @synchronized
    def tick(self, now: Optional[datetime] = None) -> TickResult:
        """
        Periodic evaluation: countdown cues and strict-mode auto-advance.

        Does nothing unless the session is running.
        """
        if self._status != SessionStatus.RUNNING:
            return TickResult()

        now = self._resolve_now(now)
        bout = self.current_bout
        config = bout.config
        elapsed = self._clock.elapsed_seconds(now)

        cue = self._cues.check(config.measure, config.target_value, elapsed)
        if cue is not None:
            event_type = SessionEventType.FINAL_CUE if cue == 0 else SessionEventType.CUE
            self._notify(event_type, seconds_remaining=cue)

        advanced = False
        if should_advance(self._goal, config.measure, config.target_value, elapsed):
            result = self.complete(now=now, value=config.target_value)
            advanced = result.applied

        return TickResult(elapsed_seconds=elapsed, cue=cue, advanced=advanced)

    # =========================================================================
    # Mid-session edits
    # =========================================================================

    @synchronized
    def insert_bout(
        self,
        bout: Bout,
        now: Optional[datetime] = None,
        persist: bool = False,
    ) -> TransitionResult:
        """
        Insert a bout right after the current one.

        Never changes the cursor or the log. With ``persist`` the whole
        session-local bout list is written back to the sequence store.
        """
        if not self._status.is_active:
            return self._reject("session is not active")

        existing = {b.id for b in self._bouts}
        if bout.id is None or bout.id in existing:
            bout = bout.with_id(self._new_bout_id())

        position = self._cursor + 1
        self._bouts = self._bouts[:position] + (bout,) + self._bouts[position:]
        self._notify(SessionEventType.BOUT_INSERTED, data={"index": position, "bout_id": bout.id})
        logger.info(f"Inserted bout {bout.id} at index {position} in session {self._execution_id}")

        persisted, error = self._persist_sequence() if persist else (None, None)
        return self._commit(persisted=persisted, error=error, indices=[position])

    @synchronized
    def apply_config_update(
        self,
        target_index: int,
        scope: UpdateScope,
        now: Optional[datetime] = None,
        measure: Optional[MeasureType] = None,
        target_value: Optional[int] = None,
        persist: bool = False,
    ) -> TransitionResult:
        """
        Change measure and/or target on the bouts selected by ``scope``.

        Completed bouts are never touched.
        """
        if not self._status.is_active:
            return self._reject("session is not active")
        if measure is None and target_value is None:
            return self._reject("no config change given")
        if target_value is not None and target_value < 0:
            return self._reject("target value cannot be negative")

        indices = self.preview_config_update(target_index, scope)
        if not indices:
            return self._reject("no bouts match the requested scope")

        self._bouts = apply_config(self._bouts, indices, measure=measure, target_value=target_value)
        logger.info(
            f"Updated config of {len(indices)} bouts ({scope.value}) "
            f"in session {self._execution_id}"
        )

        persisted, error = self._persist_sequence() if persist else (None, None)
        return self._commit(persisted=persisted, error=error, indices=indices)

    @synchronized
    def toggle_modifier(self, modifier_id: int, now: Optional[datetime] = None) -> TransitionResult:
        """Flip a modifier for the bout in progress."""
        if not self._status.is_active:
            return self._reject("session is not active")
        allowed = modifier_tracker.toggleable(self.current_bout, self._available_modifiers)
        if modifier_id not in allowed:
            return self._reject("modifier is not available for this bout")
        self._active_modifiers = modifier_tracker.toggle(self._active_modifiers, modifier_id)
        return self._commit()

    # =========================================================================
    # Internals
    # =========================================================================

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else self._time_source()

    def _new_bout_id(self) -> str:
        return uuid.uuid4().hex

    def _tag_bouts(self, bouts) -> Tuple[Bout, ...]:
        """Copy the authored list, giving every bout a unique session-local ID."""
        tagged = []
        seen = set()
        for bout in bouts:
            if bout.id is None or bout.id in seen:
                bout = bout.with_id(self._new_bout_id())
            seen.add(bout.id)
            tagged.append(bout)
        return tuple(tagged)

    def _guard_transition(self, expected_cursor: Optional[int]) -> Optional[TransitionResult]:
        if not self._status.is_active:
            return self._reject("session is not active")
        if expected_cursor is not None and expected_cursor != self._cursor:
            return self._reject(
                f"stale action for bout {expected_cursor}, current bout is {self._cursor}"
            )
        return None

    def _close_pause(self, now: datetime) -> None:
        """Fold an open pause into the bout clock and the session total."""
        if self._clock is None or not self._clock.is_paused:
            return
        self._session_pause_seconds += self._clock.open_pause_seconds(now)
        self._clock = self._clock.resume(now)

    def _enter_bout(self, now: datetime) -> None:
        """Reset per-bout state for the bout under the cursor."""
        self._clock = ExecutionClock.start(now)
        self._active_modifiers = modifier_tracker.initialize(
            self._bouts[self._cursor], self._available_modifiers
        )
        self._cues.reset()

    def _advance(
        self,
        record: CompletedBout,
        now: datetime,
        event_type: SessionEventType,
    ) -> TransitionResult:
        self._close_pause(now)
        self._log = self._log + (record,)
        self._cursor += 1
        self._notify(event_type, data={"bout_id": record.bout_id, "value": record.value})

        if self._cursor < len(self._bouts):
            self._status = SessionStatus.RUNNING
            self._enter_bout(now)
            return self._commit()

        self._status = SessionStatus.COMPLETED
        self._active_modifiers = frozenset()
        persisted, error = self._flush(now)
        self._notify(SessionEventType.SESSION_COMPLETED, data={"bouts": len(self._log)})
        logger.info(
            f"Session {self._execution_id} completed with {len(self._log)} bouts "
            f"(persisted={persisted})"
        )
        return self._commit(persisted=persisted, error=error)

    def _rewind(self, index: int, now: datetime) -> TransitionResult:
        self._close_pause(now)
        self._log = self._log[:index]
        self._cursor = index
        self._status = SessionStatus.RUNNING
        self._enter_bout(now)
        return self._commit()

    def _flush(self, completed_at: datetime) -> Tuple[bool, Optional[str]]:
        """Write the completed log to the execution store."""
        self._pending_flush_at = completed_at
        try:
            self._execution_repo.update_execution(
                self._execution_id,
                completed_log=self._log,
                total_pause_seconds=self._session_pause_seconds,
                completed_at=completed_at,
            )
        except PersistenceError as e:
            logger.warning(
                f"Flush of session {self._execution_id} failed, "
                f"keeping {len(self._log)} bouts for retry: {e.message}"
            )
            return False, e.message
        self._pending_flush_at = None
        return True, None

    def _persist_sequence(self) -> Tuple[bool, Optional[str]]:
        """Overwrite the authored sequence with the session-local bouts and groups."""
        try:
            self._sequence_repo.update_sequence(
                self._sequence_id,
                self._user_id,
                bouts=self._bouts,
                groups=self._groups,
            )
        except PersistenceError as e:
            logger.warning(f"Saving sequence {self._sequence_id} failed: {e.message}")
            return False, e.message
        return True, None

    def _notify(
        self,
        event_type: SessionEventType,
        seconds_remaining: Optional[int] = None,
        data: Optional[dict] = None,
    ) -> None:
        """Send an event to the notifier (best-effort)."""
        if self._notifier is None:
            return
        event = SessionEvent(
            type=event_type,
            execution_id=self._execution_id,
            cursor=self._cursor,
            seconds_remaining=seconds_remaining,
            data=data or {},
        )
        try:
            self._notifier.notify(event)
        except Exception as e:
            logger.warning(f"Notifier failed on {event_type.value}: {e}")

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.warning(f"Snapshot listener failed: {e}")

    def _commit(
        self,
        persisted: Optional[bool] = None,
        error: Optional[str] = None,
        indices: Optional[List[int]] = None,
    ) -> TransitionResult:
        self._version += 1
        self._publish()
        return self._result(applied=True, persisted=persisted, error=error, indices=indices)

    def _reject(self, reason: str) -> TransitionResult:
        logger.debug(f"Ignored action on session {self._execution_id}: {reason}")
        return self._result(applied=False, reason=reason)

    def _result(
        self,
        applied: bool,
        reason: Optional[str] = None,
        persisted: Optional[bool] = None,
        error: Optional[str] = None,
        indices: Optional[List[int]] = None,
    ) -> TransitionResult:
        return TransitionResult(
            applied=applied,
            status=self._status,
            cursor=self._cursor,
            version=self._version,
            reason=reason,
            persisted=persisted,
            error=error,
            indices=indices or [],
        )
