"""
Unit tests for the scope resolver.

These tests verify:
- Each scope selects the expected indices
- Completed bouts are never selected
- Narrowing as more bouts complete (monotonicity)
- Same-config results are contained in all-in-sequence results
"""

import pytest

from domain.execution.scope import UpdateScope, apply_config, resolve_scope
from domain.models import Bout, BoutGroup, MeasureType
from tests.fakes import reps, timed


@pytest.fixture
def round_trip():
    """[ex1(time,30), break(time,10), ex1(time,30)]"""
    return [timed("1", 30, "a"), Bout.rest(10, bout_id="b"), timed("1", 30, "c")]


@pytest.fixture
def mixed():
    return [
        timed("1", 30, "a"),
        Bout.rest(10, bout_id="b"),
        timed("1", 45, "c"),
        reps("2", 10, "d"),
        Bout.rest(10, bout_id="e"),
        timed("1", 30, "f"),
    ]


@pytest.mark.unit
class TestResolveScope:

    def test_round_trip_scenario(self, round_trip):
        """Before any completion both ex1 bouts match; after one, only the second."""
        assert resolve_scope(round_trip, [], 0, UpdateScope.ALL_IN_SEQUENCE, 0) == [0, 2]
        assert resolve_scope(round_trip, [], 2, UpdateScope.ALL_IN_SEQUENCE, 1) == [2]

    def test_this_only(self, mixed):
        assert resolve_scope(mixed, [], 3, UpdateScope.THIS_ONLY, 0) == [3]

    def test_this_only_on_completed_bout_is_empty(self, mixed):
        assert resolve_scope(mixed, [], 1, UpdateScope.THIS_ONLY, 2) == []

    def test_all_in_sequence_matches_identity(self, mixed):
        assert resolve_scope(mixed, [], 0, UpdateScope.ALL_IN_SEQUENCE) == [0, 2, 5]

    def test_breaks_only_match_breaks(self, mixed):
        assert resolve_scope(mixed, [], 1, UpdateScope.ALL_IN_SEQUENCE) == [1, 4]

    def test_same_config_requires_equal_target(self, mixed):
        assert resolve_scope(mixed, [], 0, UpdateScope.SAME_CONFIG) == [0, 5]

    def test_same_group(self, mixed):
        groups = [BoutGroup(id="g1", name="Superset", bout_ids=["f", "c", "d"])]
        assert resolve_scope(mixed, groups, 2, UpdateScope.SAME_GROUP) == [2, 3, 5]

    def test_same_group_ungrouped_falls_back_to_target(self, mixed):
        groups = [BoutGroup(id="g1", bout_ids=["c", "d"])]
        assert resolve_scope(mixed, groups, 0, UpdateScope.SAME_GROUP) == [0]

    def test_out_of_range_target(self, mixed):
        assert resolve_scope(mixed, [], 99, UpdateScope.THIS_ONLY) == []
        assert resolve_scope(mixed, [], -1, UpdateScope.ALL_IN_SEQUENCE) == []

    @pytest.mark.parametrize("scope", list(UpdateScope))
    def test_completed_indices_excluded(self, mixed, scope):
        groups = [BoutGroup(id="g1", bout_ids=["a", "c", "f"])]
        for completed in range(len(mixed) + 1):
            result = resolve_scope(mixed, groups, 5, scope, completed)
            assert all(i >= completed for i in result)

    @pytest.mark.parametrize("scope", list(UpdateScope))
    def test_monotonic_in_completed_count(self, mixed, scope):
        groups = [BoutGroup(id="g1", bout_ids=["a", "c", "f"])]
        previous = set(resolve_scope(mixed, groups, 5, scope, 0))
        for completed in range(1, len(mixed) + 1):
            current = set(resolve_scope(mixed, groups, 5, scope, completed))
            assert current <= previous
            previous = current

    @pytest.mark.parametrize("target_index", range(6))
    @pytest.mark.parametrize("completed", range(7))
    def test_same_config_within_all_in_sequence(self, mixed, target_index, completed):
        same_config = set(resolve_scope(mixed, [], target_index, UpdateScope.SAME_CONFIG, completed))
        all_in_sequence = set(
            resolve_scope(mixed, [], target_index, UpdateScope.ALL_IN_SEQUENCE, completed)
        )

        assert same_config <= all_in_sequence
        assert all_in_sequence <= set(range(completed, len(mixed)))

    def test_results_sorted_and_unique(self, mixed):
        groups = [BoutGroup(id="g1", bout_ids=["f", "a", "c"])]
        result = resolve_scope(mixed, groups, 0, UpdateScope.SAME_GROUP)
        assert result == sorted(set(result))


@pytest.mark.unit
class TestApplyConfig:

    def test_apply_changes_only_selected(self, round_trip):
        updated = apply_config(round_trip, [2], target_value=45)
        assert updated[0].config.target_value == 30
        assert updated[2].config.target_value == 45
        assert updated[2].id == "c"

    def test_apply_changes_measure(self, round_trip):
        updated = apply_config(round_trip, [0], measure=MeasureType.REPETITIONS)
        assert updated[0].config.measure == MeasureType.REPETITIONS
        assert updated[0].config.target_value == 30

    def test_apply_is_copy_on_write(self, round_trip):
        original = tuple(round_trip)
        apply_config(round_trip, [0, 2], target_value=60)
        assert tuple(round_trip) == original
