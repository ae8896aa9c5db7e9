from uuid import uuid4

from taskboard.backend.models.task import Task
from taskboard.backend.repositories.task_store import ASC
from taskboard.backend.schemas.task import TaskCreate, TaskUpdate, percentage_of
from taskboard.backend.services import task_service


def test_insert_assigns_id_and_defaults(store):
    task = store.insert_one(Task(title="x"))

    assert task.id is not None
    assert (task.category, task.priority, task.completed) == ("personal", "medium", False)
    assert store.find_by_id(task.id).title == "x"


def test_created_at_defaults_to_aware_utc():
    task = Task(title="x")

    assert task.created_at.tzinfo is not None
    assert task.created_at.utcoffset().total_seconds() == 0


def test_insert_with_default_timestamp_succeeds(store):
    saved = store.insert_one(Task(title="x"))

    assert store.count() == 1
    assert saved.created_at is not None


def test_find_many_applies_every_filter(store):
    store.insert_one(Task(title="a", category="work", completed=True))
    store.insert_one(Task(title="b", category="work"))
    store.insert_one(Task(title="c", category="home", completed=True))

    found = store.find_many({"category": "work", "completed": True}, ("title", ASC))

    assert [t.title for t in found] == ["a"]


def test_update_and_delete_missing_ids(store):
    assert store.update_by_id(uuid4(), {"title": "y"}) is None
    assert store.delete_by_id(uuid4()) is False


def test_count_and_group_count_by(store):
    for category in ("work", "work", "home"):
        store.insert_one(Task(title="t", category=category))

    assert store.count() == 3
    assert store.count({"category": "home"}) == 1
    assert store.group_count_by("category") == {"work": 2, "home": 1}


def test_service_partial_update_keeps_other_fields(store):
    task = task_service.create_task(store, TaskCreate(title="t", description="d", priority="high"))

    updated = task_service.update_task(store, str(task.id), TaskUpdate(completed=True))

    assert updated.completed is True
    assert (updated.title, updated.description, updated.priority) == ("t", "d", "high")


def test_service_stats_invariants(store):
    for i, category in enumerate(("work", "home", "home")):
        task = task_service.create_task(store, TaskCreate(title=f"t{i}", category=category))
        if i == 0:
            task_service.update_task(store, str(task.id), TaskUpdate(completed=True))

    stats = task_service.task_stats(store)

    assert stats.pending + stats.completed == stats.total == 3
    assert sum(stats.by_category.values()) == stats.total
    assert stats.percentage == 33


def test_percentage_of():
    assert percentage_of(0, 0) == 0
    assert percentage_of(1, 8) == 13
    assert percentage_of(2, 3) == 67
    assert percentage_of(5, 5) == 100
