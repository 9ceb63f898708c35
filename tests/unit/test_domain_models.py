"""
Unit tests for domain models.

These tests verify:
- Model validation
- Model serialization
- Computed properties
- Group membership rules
"""

import json
import pytest

from tests.fakes import T0, at, timed


@pytest.mark.unit
class TestBoutModel:
    """Tests for the Bout value object."""

    def test_exercise_bout_creation(self):
        """Bout can be created from plain dicts."""
        from domain.models import Bout, MeasureType

        bout = Bout(id="b1", exercise_id="12", config={"measure": "repetitions", "target_value": 10})
        assert bout.config.measure == MeasureType.REPETITIONS
        assert not bout.is_break
        assert str(bout) == "Exercise #12 10x"

    def test_exercise_requires_exercise_id(self):
        from domain.models import Bout

        with pytest.raises(ValueError):
            Bout(config={"measure": "time", "target_value": 30})

    def test_break_cannot_carry_exercise(self):
        from domain.models import Bout, BoutKind

        with pytest.raises(ValueError):
            Bout(kind=BoutKind.BREAK, exercise_id="1", config={"measure": "time"})

    def test_break_identity(self):
        """Breaks share one identity, regardless of duration."""
        from domain.models import Bout

        assert Bout.rest(10).identity == Bout.rest(60).identity
        assert Bout.rest(10).identity != timed("1", 10).identity

    def test_negative_target_rejected(self):
        from domain.models import BoutConfig

        with pytest.raises(ValueError):
            BoutConfig(measure="time", target_value=-5)

    def test_with_config_returns_copy(self):
        from domain.models import MeasureType

        bout = timed("1", 30, "b1")
        changed = bout.with_config(target_value=45)
        assert changed.config.target_value == 45
        assert changed.config.measure == MeasureType.TIME
        assert bout.config.target_value == 30
        assert bout.with_config() is bout

    def test_bout_is_frozen(self):
        bout = timed("1", 30, "b1")
        with pytest.raises(Exception):
            bout.exercise_id = "2"


@pytest.mark.unit
class TestSequenceModel:
    """Tests for the Sequence aggregate."""

    def test_goal_resolution(self):
        from domain.models import GoalMode, Sequence

        assert Sequence(id="1", goal="strict").goal == GoalMode.STRICT
        assert Sequence(id="1", goal=" Strict ").goal == GoalMode.STRICT
        assert Sequence(id="1", goal="hard").goal == GoalMode.ELASTIC
        assert Sequence(id="1", goal=None).goal == GoalMode.ELASTIC
        assert Sequence(id="1").goal == GoalMode.ELASTIC

    def test_estimated_duration(self):
        from domain.models import Bout, Sequence
        from tests.fakes import reps

        sequence = Sequence(
            id="1",
            bouts=[timed("1", 45), Bout.rest(30), reps("2", 10), timed("3", 60)],
        )
        duration = sequence.estimated_duration()
        assert duration.total_seconds == 135
        assert duration.total_minutes == 2
        assert duration.formatted == "2m 15s"

    def test_groups_pruned_to_existing_bouts(self):
        from domain.models import BoutGroup, Sequence

        sequence = Sequence(
            id="1",
            bouts=[timed("1", 30, "b1"), timed("2", 30, "b2")],
            groups=[
                BoutGroup(id="g1", bout_ids=["b1", "gone"]),
                BoutGroup(id="g2", bout_ids=["missing"]),
            ],
        )
        assert [g.id for g in sequence.groups] == ["g1"]
        assert sequence.groups[0].bout_ids == ["b1"]

    def test_bout_in_two_groups_rejected(self):
        from domain.models import BoutGroup, Sequence

        with pytest.raises(ValueError):
            Sequence(
                id="1",
                bouts=[timed("1", 30, "b1")],
                groups=[
                    BoutGroup(id="g1", bout_ids=["b1"]),
                    BoutGroup(id="g2", bout_ids=["b1"]),
                ],
            )

    def test_find_bout(self):
        from domain.models import Sequence

        sequence = Sequence(id="1", bouts=[timed("1", 30, "b1")])
        assert sequence.find_bout("b1").exercise_id == "1"
        assert sequence.find_bout("b9") is None


@pytest.mark.unit
class TestBoutGroup:
    """Tests for group helpers."""

    def test_duplicate_member_rejected(self):
        from domain.models import BoutGroup

        with pytest.raises(ValueError):
            BoutGroup(id="g1", bout_ids=["b1", "b1"])

    def test_position_is_one_based(self):
        from domain.models import BoutGroup

        group = BoutGroup(id="g1", bout_ids=["b1", "b3", "b5"])
        assert group.position_of("b1") == 1
        assert group.position_of("b5") == 3
        assert group.position_of("b2") is None
        assert group.size == 3

    def test_find_group(self):
        from domain.models import BoutGroup, find_group

        groups = [BoutGroup(id="g1", bout_ids=["b1"]), BoutGroup(id="g2", bout_ids=["b2"])]
        assert find_group(groups, "b2").id == "g2"
        assert find_group(groups, "b3") is None
        assert find_group(groups, None) is None

    def test_prune_deletes_emptied_groups(self):
        from domain.models import BoutGroup, prune_groups

        groups = [BoutGroup(id="g1", bout_ids=["b1", "b2"]), BoutGroup(id="g2", bout_ids=["b3"])]
        pruned = prune_groups(groups, ["b2"])
        assert len(pruned) == 1
        assert pruned[0].bout_ids == ["b2"]


@pytest.mark.unit
class TestModifierModel:
    """Tests for modifier display values."""

    @pytest.mark.parametrize("value,unit,expected", [
        (10, "kg", "10kg"),
        (2.5, "kg", "2.5kg"),
        (2, "level", "2"),
        (3, None, "3"),
        (None, "kg", None),
    ])
    def test_display_value(self, value, unit, expected):
        from domain.models import Modifier

        assert Modifier(id=1, name="Vest", value=value, unit=unit).display_value == expected


@pytest.mark.unit
class TestCompletedBout:
    """Tests for completed-bout records."""

    def test_from_bout(self):
        from domain.models import ActiveModifier, CompletedBout, MeasureType

        record = CompletedBout.from_bout(
            timed("1", 30, "b1"),
            started_at=T0,
            completed_at=at(31),
            value=31,
            active_modifiers=(ActiveModifier(modifier_id=7, value="10kg"),),
        )
        assert record.bout_id == "b1"
        assert record.measure == MeasureType.TIME
        assert record.value == 31
        assert record.active_modifiers[0].value == "10kg"

    def test_skipped_drops_value_and_modifiers(self):
        from domain.models import ActiveModifier, CompletedBout

        record = CompletedBout.from_bout(
            timed("1", 30, "b1"),
            started_at=T0,
            completed_at=at(2),
            value=2,
            skipped=True,
            active_modifiers=(ActiveModifier(modifier_id=7),),
        )
        assert record.value is None
        assert record.active_modifiers is None

    def test_break_record_has_no_exercise(self):
        from domain.models import Bout, BoutKind, CompletedBout

        record = CompletedBout.from_bout(Bout.rest(10, "r1"), started_at=T0, completed_at=at(10), value=10)
        assert record.kind == BoutKind.BREAK
        assert record.exercise_id is None
        json.loads(record.model_dump_json())


@pytest.mark.unit
class TestSessionStatus:

    @pytest.mark.parametrize("status,active", [
        ("not_started", False),
        ("running", True),
        ("paused", True),
        ("completed", False),
        ("quit", False),
    ])
    def test_is_active(self, status, active):
        from domain.models import SessionStatus

        assert SessionStatus(status).is_active is active


@pytest.mark.unit
class TestSessionSnapshot:

    def test_modifier_fields_are_immutable(self):
        from domain.models import SessionSnapshot, SessionStatus

        snapshot = SessionSnapshot(
            status=SessionStatus.RUNNING,
            active_modifiers=[3, 7],
            toggleable_modifiers=[3, 7, 9],
        )

        assert snapshot.active_modifiers == (3, 7)
        assert snapshot.toggleable_modifiers == (3, 7, 9)
        with pytest.raises(AttributeError):
            snapshot.active_modifiers.append(11)

    def test_modifier_fields_serialize_as_lists(self):
        from domain.models import SessionSnapshot, SessionStatus

        snapshot = SessionSnapshot(status=SessionStatus.RUNNING, active_modifiers=(3,))
        assert json.loads(snapshot.model_dump_json())["active_modifiers"] == [3]
