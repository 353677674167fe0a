from enum import Enum


class TaskStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Task:
    def __init__(self, title: str = "", description: str = "", status: TaskStatus = TaskStatus.PENDING,
                 id: int = 0):
        self.id = id
        self.title = title
        self.description = description
        self.status = status

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
        }


class User:
    def __init__(self, username: str, email: str, password_hash: str, id: int = 0):
        self.id = id
        self.username = username
        self.email = email
        self.password_hash = password_hash

    def to_json(self) -> dict:
        # password_hash stays out of every response body
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
        }

    def __repr__(self):
        return f"<User id={self.id} username={self.username!r}>"
