"""
Deterministic building blocks of the session engine.

- clock: pause-aware elapsed time for the current bout
- policy: auto-advance and countdown cue decisions
- modifiers: per-bout active equipment modifiers
- scope: which bouts a configuration edit applies to

All functions take their inputs explicitly (including ``now``) and return new
values; none of them mutate shared state.
"""

from domain.execution import modifiers
from domain.execution.clock import ExecutionClock, elapsed
from domain.execution.policy import CueTracker, in_cue_window, is_final_cue, should_advance
from domain.execution.scope import UpdateScope, apply_config, resolve_scope

__all__ = [
    "ExecutionClock",
    "elapsed",
    "CueTracker",
    "in_cue_window",
    "is_final_cue",
    "should_advance",
    "UpdateScope",
    "apply_config",
    "resolve_scope",
    "modifiers",
]
