"""
Tests for the port definitions in application.ports.

These tests verify that:
1. Protocol definitions are importable
2. Protocols define the expected methods
3. Fakes and Supabase adapters expose every protocol method
"""
import inspect

import pytest

# All tests in this module are pure logic tests (no TestClient) - mark as unit
pytestmark = pytest.mark.unit


def protocol_methods(protocol) -> set:
    return {
        name
        for name, member in inspect.getmembers(protocol, inspect.isfunction)
        if not name.startswith("_")
    }


class TestProtocolMethods:
    """Each port declares exactly the operations the engine uses."""

    def test_sequence_repository(self):
        from application.ports import SequenceRepository

        assert protocol_methods(SequenceRepository) == {"get_sequence", "update_sequence"}

    def test_execution_repository(self):
        from application.ports import ExecutionRepository

        assert protocol_methods(ExecutionRepository) == {"start_execution", "update_execution"}

    def test_catalogs(self):
        from application.ports import ExerciseCatalog, ModifierCatalog

        assert protocol_methods(ExerciseCatalog) == {"list_exercises"}
        assert protocol_methods(ModifierCatalog) == {"list_modifiers"}

    def test_rating_service(self):
        from application.ports import RatingService

        assert protocol_methods(RatingService) == {"submit_rating"}

    def test_notifier(self):
        from application.ports import SessionNotifier

        assert protocol_methods(SessionNotifier) == {"notify"}


class TestImplementationsSatisfyPorts:
    """Fakes and adapters implement every method of their port."""

    @pytest.mark.parametrize("port_name,implementations", [
        ("SequenceRepository", [
            "tests.fakes.sequence_repository:FakeSequenceRepository",
            "infrastructure.db.sequence_repository:SupabaseSequenceRepository",
        ]),
        ("ExecutionRepository", [
            "tests.fakes.execution_repository:FakeExecutionRepository",
            "infrastructure.db.execution_repository:SupabaseExecutionRepository",
        ]),
        ("ExerciseCatalog", [
            "tests.fakes.catalog:FakeExerciseCatalog",
            "infrastructure.db.catalog_repository:SupabaseExerciseCatalog",
        ]),
        ("ModifierCatalog", [
            "tests.fakes.catalog:FakeModifierCatalog",
            "infrastructure.db.catalog_repository:SupabaseModifierCatalog",
        ]),
        ("RatingService", [
            "tests.fakes.rating_service:FakeRatingService",
            "infrastructure.db.rating_service:SupabaseRatingService",
        ]),
        ("SessionNotifier", [
            "tests.fakes.notifier:RecordingNotifier",
            "infrastructure.notifications.logging_notifier:LoggingSessionNotifier",
        ]),
    ])
    def test_methods_present(self, port_name, implementations):
        import importlib

        import application.ports as ports

        expected = protocol_methods(getattr(ports, port_name))
        for path in implementations:
            module_name, class_name = path.split(":")
            cls = getattr(importlib.import_module(module_name), class_name)
            missing = {m for m in expected if not callable(getattr(cls, m, None))}
            assert not missing, f"{class_name} is missing {missing}"

    def test_signatures_match(self):
        """Keyword-only arguments of update methods match between port and adapter."""
        from application.ports import ExecutionRepository, SequenceRepository
        from infrastructure.db import SupabaseExecutionRepository, SupabaseSequenceRepository

        pairs = [
            (SequenceRepository.update_sequence, SupabaseSequenceRepository.update_sequence),
            (ExecutionRepository.update_execution, SupabaseExecutionRepository.update_execution),
        ]
        for port_method, adapter_method in pairs:
            port_params = list(inspect.signature(port_method).parameters)
            adapter_params = list(inspect.signature(adapter_method).parameters)
            assert port_params == adapter_params
