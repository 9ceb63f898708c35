"""
Repository and Collaborator Interfaces (Ports) for the session engine.

This package defines abstract interfaces that decouple the engine from
infrastructure (database, device effects). Implementations are provided in
the infrastructure layer; in-memory fakes live in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SequenceRepository, ExecutionRepository

    class SessionRuntime:
        def __init__(self, sequence_repo: SequenceRepository, ...):
            self._sequence_repo = sequence_repo
"""

# Sequence store
from application.ports.sequence_repository import SequenceRepository

# Execution store
from application.ports.execution_repository import ExecutionRepository

# Read-only catalogs
from application.ports.catalog import ExerciseCatalog, ModifierCatalog

# Rating / personal records
from application.ports.rating_service import RatingService

# Device effects
from application.ports.notifier import (
    SessionEvent,
    SessionEventType,
    SessionNotifier,
)

__all__ = [
    # Sequences
    "SequenceRepository",
    # Executions
    "ExecutionRepository",
    # Catalogs
    "ExerciseCatalog",
    "ModifierCatalog",
    # Rating
    "RatingService",
    # Notifications
    "SessionEvent",
    "SessionEventType",
    "SessionNotifier",
]
