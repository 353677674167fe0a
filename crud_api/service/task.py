import logging
import typing as t

from crud_api.errors import MalformedBodyError, NotFoundError
from crud_api.models import Task, TaskStatus
from crud_api.service.parsing import require_object, string_field
from crud_api.store.task import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, store: TaskStore):
        self.__store = store

    def insert_task(self, json_task: t.Any) -> Task:
        title, description, status = TaskService._decode(json_task)
        task = self.__store.insert_task(Task(title=title, description=description, status=status))
        logger.info("Created task %s", task.id)
        return task

    def list_tasks(self) -> t.List[Task]:
        return self.__store.list_tasks()

    def get_task(self, task_id: int) -> Task:
        task = self.__store.get_task(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def update_task(self, task_id: int, json_task: t.Any) -> Task:
        title, description, status = TaskService._decode(json_task)
        task = self.__store.update_task(task_id, title=title, description=description, status=status)
        if task is None:
            raise NotFoundError("Task not found")
        logger.info("Updated task %s", task_id)
        return task

    def delete_task(self, task_id: int) -> None:
        if not self.__store.delete_task(task_id):
            raise NotFoundError("Task not found")
        logger.info("Deleted task %s", task_id)

    @staticmethod
    def _decode(json_task: t.Any) -> t.Tuple[str, str, TaskStatus]:
        body = require_object(json_task)
        title = string_field(body, "title")
        description = string_field(body, "description")
        raw_status = string_field(body, "status")
        if not raw_status:
            return title, description, TaskStatus.PENDING
        try:
            status = TaskStatus(raw_status)
        except ValueError:
            raise MalformedBodyError(f"Invalid status '{raw_status}'")
        return title, description, status
