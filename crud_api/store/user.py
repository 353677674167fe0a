import typing as t

from crud_api.models import User
from crud_api.store.store import Store


class UserStore(Store[User]):
    def __init__(self):
        super().__init__()

    def insert_user(self, user: User) -> User:
        return self.insert(user)

    def find_user_by_username(self, username: str) -> t.Optional[User]:
        return self.find(lambda user: user.username == username)

    def update_user(self, user_id: int, email: t.Optional[str], password_hash: t.Optional[str]) -> t.Optional[User]:
        # None leaves the stored value untouched
        def _apply(user: User) -> None:
            if email is not None:
                user.email = email
            if password_hash is not None:
                user.password_hash = password_hash

        return self.modify(user_id, _apply)

    def delete_user(self, user_id: int) -> bool:
        return self.remove(user_id)
