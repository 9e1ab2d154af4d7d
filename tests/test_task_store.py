# tests/test_task_store.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskflow.tasks.errors import NotFoundError, ValidationError
from taskflow.tasks.sample_data import sample_tasks
from taskflow.tasks.task_models import TaskPriority, TaskStatus
from taskflow.tasks.task_store import TaskStore

from .conftest import task_fields
from .fakes import FakeClock, RecordingLock


def _snapshot(store: TaskStore) -> list[dict]:
    return [t.to_dict() for t in store.list()]


def test_create_assigns_unique_id_and_equal_timestamps(store: TaskStore) -> None:
    a = store.create(task_fields(title="A"))
    b = store.create(task_fields(title="B"))

    assert a.id != b.id
    assert a.created_at == a.updated_at
    assert b.created_at == b.updated_at
    assert [t.id for t in store.list()] == [a.id, b.id]


def test_create_normalizes_enums_and_keeps_title_verbatim(store: TaskStore) -> None:
    task = store.create(
        {"title": "  Trim me  ", "status": "In-Progress", "priority": "HIGH", "due_date": "2025-01-05"}
    )
    assert task.title == "  Trim me  "
    assert task.to_dict()["title"] == "  Trim me  "
    assert task.status is TaskStatus.IN_PROGRESS
    assert task.priority is TaskPriority.HIGH
    assert task.due_date == "2025-01-05"
    assert task.description == ""


def test_create_ignores_unknown_and_identity_fields(store: TaskStore) -> None:
    task = store.create(task_fields(id="forged", createdAt="1999-01-01T00:00:00Z", color="red"))
    assert task.id != "forged"
    assert task.created_at.year == 2025
    assert not hasattr(task, "color")


def test_create_with_blank_title_fails_with_title_only(store: TaskStore) -> None:
    with pytest.raises(ValidationError) as exc:
        store.create({"title": "", "priority": "high", "dueDate": "2025-01-01", "status": "pending"})
    assert exc.value.fields == ("title",)
    assert len(store) == 0


@pytest.mark.parametrize(
    "missing",
    [
        ("title",),
        ("status", "priority"),
        ("dueDate", "title", "status"),
        ("title", "priority", "dueDate", "status"),
    ],
)
def test_create_reports_every_missing_field(store: TaskStore, missing: tuple[str, ...]) -> None:
    fields = task_fields()
    for name in missing:
        del fields[name]

    with pytest.raises(ValidationError) as exc:
        store.create(fields)

    assert set(exc.value.fields) == set(missing)
    assert len(exc.value.fields) == len(missing)
    assert len(store) == 0


def test_whitespace_only_counts_as_missing(store: TaskStore) -> None:
    with pytest.raises(ValidationError) as exc:
        store.create(task_fields(title="   ", dueDate="\t"))
    assert exc.value.fields == ("title", "dueDate")
    assert "title is required" in str(exc.value)


def test_unusable_values_are_reported(store: TaskStore) -> None:
    with pytest.raises(ValidationError) as exc:
        store.create(task_fields(status="blocked", priority="urgent", dueDate="next week"))
    assert exc.value.fields == ("priority", "dueDate", "status")


def test_ids_never_collide_within_the_same_millisecond() -> None:
    clock = FakeClock()
    clock.freeze()
    store = TaskStore(clock=clock)

    ids = [store.create(task_fields(title=f"t{i}")).id for i in range(5)]
    assert len(set(ids)) == 5
    assert [int(i) for i in ids] == sorted(int(i) for i in ids)


def test_deleted_ids_are_not_reused() -> None:
    clock = FakeClock()
    clock.freeze()
    store = TaskStore(clock=clock)

    first = store.create(task_fields())
    store.delete(first.id)
    second = store.create(task_fields())
    assert second.id != first.id


def test_loaded_ids_are_reserved(clock: FakeClock) -> None:
    store = TaskStore(clock=clock, tasks=sample_tasks())
    assert [t.id for t in store.list()] == ["1", "2", "3", "4", "5"]

    created = store.create(task_fields())
    assert created.id not in {"1", "2", "3", "4", "5"}


def test_load_skips_duplicate_ids(store: TaskStore) -> None:
    store.load(sample_tasks())
    store.load(sample_tasks())
    assert len(store) == 5


def test_update_changes_whitelisted_fields_only(store: TaskStore, clock: FakeClock) -> None:
    original = store.create(task_fields())

    updated = store.update(
        original.id,
        task_fields(
            title="Write final report",
            description="",
            status="completed",
            priority="high",
            dueDate="2025-09-15",
            id="other",
            createdAt="2000-01-01T00:00:00Z",
            owner="someone",
        ),
    )

    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at
    assert updated.title == "Write final report"
    assert updated.description == ""
    assert updated.status is TaskStatus.COMPLETED
    assert updated.priority is TaskPriority.HIGH
    assert updated.due_date == "2025-09-15"
    assert store.get(original.id) == updated


def test_update_without_description_keeps_it(store: TaskStore) -> None:
    original = store.create(task_fields(description="keep me"))
    fields = task_fields(title="New title")
    del fields["description"]

    updated = store.update(original.id, fields)
    assert updated.description == "keep me"


def test_update_timestamp_never_goes_backwards() -> None:
    clock = FakeClock(step=timedelta(seconds=-1))
    store = TaskStore(clock=clock)
    task = store.create(task_fields())

    updated = store.update(task.id, task_fields(title="again"))
    assert updated.updated_at >= task.updated_at


def test_update_unknown_id_leaves_store_unchanged(store: TaskStore) -> None:
    store.create(task_fields(title="A"))
    store.create(task_fields(title="B"))
    before = _snapshot(store)

    with pytest.raises(NotFoundError) as exc:
        store.update("missing", task_fields(title="C"))

    assert exc.value.task_id == "missing"
    assert _snapshot(store) == before


def test_update_validation_failure_leaves_store_unchanged(store: TaskStore) -> None:
    task = store.create(task_fields())
    before = _snapshot(store)

    with pytest.raises(ValidationError) as exc:
        store.update(task.id, task_fields(title=" ", priority=""))

    assert exc.value.fields == ("title", "priority")
    assert _snapshot(store) == before


def test_delete_removes_exactly_one_and_keeps_order(store: TaskStore) -> None:
    ids = [store.create(task_fields(title=t)).id for t in ("A", "B", "C", "D")]

    store.delete(ids[1])
    assert [t.id for t in store.list()] == [ids[0], ids[2], ids[3]]

    with pytest.raises(NotFoundError):
        store.delete(ids[1])
    assert len(store) == 3


def test_list_returns_a_copy(store: TaskStore) -> None:
    store.create(task_fields())
    listing = store.list()
    listing.clear()
    assert len(store) == 1


def test_toggle_status_flips_and_refreshes(store: TaskStore) -> None:
    task = store.create(task_fields(status="in-progress"))

    done = store.toggle_status(task.id)
    assert done.status is TaskStatus.COMPLETED
    assert done.updated_at > task.updated_at

    back = store.toggle_status(task.id)
    assert back.status is TaskStatus.PENDING
    assert back.title == task.title
    assert back.created_at == task.created_at

    with pytest.raises(NotFoundError):
        store.toggle_status("missing")


def test_toggle_status_reads_and_writes_under_one_lock_acquisition(clock: FakeClock) -> None:
    store = TaskStore(clock=clock)
    task = store.create(task_fields(status="pending"))

    lock = RecordingLock()
    store._lock = lock
    held_at_stamp: list[bool] = []

    def stamping_clock():
        held_at_stamp.append(lock.locked())
        return clock()

    store._clock = stamping_clock

    done = store.toggle_status(task.id)
    assert done.status is TaskStatus.COMPLETED
    assert lock.acquisitions == 1
    assert held_at_stamp == [True]


def test_naive_clock_is_treated_as_utc() -> None:
    store = TaskStore(clock=lambda: datetime(2025, 1, 1, 9, 30))
    task = store.create(task_fields())
    assert task.created_at == datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)
