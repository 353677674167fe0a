import pytest

from crud_api.errors import MalformedBodyError, NotFoundError
from crud_api.models import TaskStatus
from crud_api.service.task import TaskService
from crud_api.store.task import TaskStore


@pytest.fixture()
def service():
    service = TaskService(TaskStore())

    yield service


def test_insert_task_defaults(service):
    task = service.insert_task({"title": "buy milk"})

    assert task.id == 1
    assert task.description == ""
    assert task.status == TaskStatus.PENDING


@pytest.mark.parametrize("body", [
    None,
    [],
    "title",
    {"title": 5},
    {"title": "a", "status": "archived"},
    {"title": "a", "description": ["x"]},
])
def test_insert_task_rejects_bad_bodies(service, body):
    with pytest.raises(MalformedBodyError):
        service.insert_task(body)

    assert service.list_tasks() == []


def test_get_task_returns_created_record(service):
    created = service.insert_task({"title": "a", "description": "b", "status": "completed"})

    assert service.get_task(created.id).to_json() == created.to_json()


def test_update_task_preserves_id(service):
    created = service.insert_task({"title": "a", "description": "b"})

    updated = service.update_task(created.id, {"id": 42, "title": "c", "status": "completed"})

    assert updated.to_json() == {"id": created.id, "title": "c", "description": "", "status": "completed"}


def test_update_bad_body_does_not_touch_store(mocker, service):
    update = mocker.patch("crud_api.store.task.TaskStore.update_task")

    with pytest.raises(MalformedBodyError):
        service.update_task(1, {"status": 1})

    update.assert_not_called()


def test_missing_task(mocker, service):
    mocker.patch("crud_api.store.task.TaskStore.delete_task", lambda p1, p2: False)

    with pytest.raises(NotFoundError):
        service.delete_task(1)

    with pytest.raises(NotFoundError):
        service.get_task(1)

    with pytest.raises(NotFoundError):
        service.update_task(1, {"title": "a"})
