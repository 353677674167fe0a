import typing as t

from crud_api.models import Task, TaskStatus
from crud_api.store.store import Store


class TaskStore(Store[Task]):
    def __init__(self):
        super().__init__()

    def insert_task(self, task: Task) -> Task:
        return self.insert(task)

    def list_tasks(self) -> t.List[Task]:
        return self.fetch_all()

    def get_task(self, task_id: int) -> t.Optional[Task]:
        return self.fetch_one(task_id)

    def update_task(self, task_id: int, title: str, description: str, status: TaskStatus) -> t.Optional[Task]:
        def _apply(task: Task) -> None:
            task.title = title
            task.description = description
            task.status = status

        return self.modify(task_id, _apply)

    def delete_task(self, task_id: int) -> bool:
        return self.remove(task_id)
