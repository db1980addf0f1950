"""Tests for `habit_tracker.database.habit_store`."""

import time

import pytest

from habit_tracker.database.base_class import Base
from habit_tracker.exceptions import StorageError
from habit_tracker.model.habits import DEFAULT_COLOUR, DEFAULT_EMOJI


def test_create_applies_defaults(store):
    habit = store.create_habit("Read")

    assert habit.id > 0
    assert habit.emoji == DEFAULT_EMOJI
    assert habit.colour == DEFAULT_COLOUR
    assert habit.current_streak == 0
    assert habit.last_checked_in is None
    assert habit.archived_at is None
    assert habit.created_at is not None


def test_list_is_newest_first_and_hides_archived(store):
    first = store.create_habit("Read")
    time.sleep(0.01)
    second = store.create_habit("Run")
    time.sleep(0.01)
    third = store.create_habit("Write")
    store.archive_habit(second.id)

    assert [h.id for h in store.list_habits()] == [third.id, first.id]
    assert [h.id for h in store.list_habits(include_archived=True)] == [third.id, second.id, first.id]


def test_get_missing_habit(store):
    assert store.get_habit(999) is None


def test_update_changes_only_supplied_fields(store):
    habit = store.create_habit("Read", "📚", "#112233")

    updated = store.update_habit(habit.id, colour="#abcdef", name=None)

    assert updated.colour == "#abcdef"
    assert updated.name == "Read"
    assert updated.emoji == "📚"
    assert store.update_habit(999, name="x") is None


def test_archive_twice_is_not_found(store):
    habit = store.create_habit("Read")

    assert store.archive_habit(habit.id).archived_at is not None
    assert store.archive_habit(habit.id) is None
    assert store.restore_habit(habit.id).archived_at is None
    assert store.restore_habit(habit.id) is None


def test_record_checkin_writes_streak_and_history(store):
    habit = store.create_habit("Read")

    updated = store.record_checkin(habit.id, "2025-03-15", 1)

    assert updated.current_streak == 1
    assert updated.last_checked_in == "2025-03-15"
    assert [c.checkin_date for c in store.get_history(habit.id)] == ["2025-03-15"]


def test_record_checkin_never_duplicates_a_day(store):
    habit = store.create_habit("Read")

    store.record_checkin(habit.id, "2025-03-15", 1)
    store.record_checkin(habit.id, "2025-03-15", 1)

    assert len(store.get_history(habit.id)) == 1


def test_record_checkin_compare_and_swap(store):
    habit = store.create_habit("Read")
    store.record_checkin(habit.id, "2025-03-15", 1, expected_last_checked_in=None)

    stale = store.record_checkin(habit.id, "2025-03-16", 2, expected_last_checked_in=None)

    assert stale is None
    current = store.get_habit(habit.id)
    assert current.current_streak == 1
    assert current.last_checked_in == "2025-03-15"
    assert len(store.get_history(habit.id)) == 1


def test_record_checkin_compare_and_swap_skips_archived(store):
    habit = store.create_habit("Read")
    store.archive_habit(habit.id)

    assert store.record_checkin(habit.id, "2025-03-15", 1, expected_last_checked_in=None) is None
    assert len(store.get_history(habit.id)) == 0


def test_history_is_newest_first_and_limited(store):
    habit = store.create_habit("Read")
    for streak, day in enumerate(["2025-03-13", "2025-03-14", "2025-03-15"], start=1):
        store.record_checkin(habit.id, day, streak)

    assert [c.checkin_date for c in store.get_history(habit.id, 2)] == ["2025-03-15", "2025-03-14"]


def test_deleted_id_is_never_reused(store):
    first = store.create_habit("Read")
    store.delete_habit(first.id)

    second = store.create_habit("Run")

    assert second.id != first.id


def test_delete_cascades_to_checkins(store):
    habit = store.create_habit("Read")
    store.record_checkin(habit.id, "2025-03-14", 1)
    store.record_checkin(habit.id, "2025-03-15", 2)

    assert store.delete_habit(habit.id) is True
    assert len(store.get_history(habit.id)) == 0
    assert store.delete_habit(habit.id) is False


def test_database_failure_is_a_storage_error(store, engine):
    Base.metadata.drop_all(bind=engine)

    with pytest.raises(StorageError):
        store.list_habits()


def test_habit_lock_is_shared_per_habit(store):
    assert store.habit_lock(1) is store.habit_lock(1)
    assert store.habit_lock(1) is not store.habit_lock(2)
