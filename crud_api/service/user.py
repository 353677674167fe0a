import logging
import typing as t

from werkzeug.security import check_password_hash, generate_password_hash

from crud_api.errors import InvalidCredentialsError, NotFoundError
from crud_api.models import User
from crud_api.service.parsing import parse_body_id, require_object, string_field
from crud_api.store.user import UserStore

logger = logging.getLogger(__name__)

# checked against when the username is unknown, so both login failures cost one hash check
_UNKNOWN_USER_HASH = generate_password_hash("unknown-user")


class UserService:
    def __init__(self, store: UserStore):
        self.__store = store

    def register_user(self, json_user: t.Any) -> User:
        body = require_object(json_user)
        user = User(username=string_field(body, "username"),
                    email=string_field(body, "email"),
                    password_hash=generate_password_hash(string_field(body, "password")))

        user = self.__store.insert_user(user)
        logger.info("Registered user %s", user.id)
        return user

    def login(self, json_credentials: t.Any) -> User:
        body = require_object(json_credentials)
        username = string_field(body, "username")
        password = string_field(body, "password")

        user = self.__store.find_user_by_username(username)
        # unknown user and wrong password are reported the same way
        if user is None:
            check_password_hash(_UNKNOWN_USER_HASH, password)
            logger.info("Rejected login")
            raise InvalidCredentialsError()
        if not check_password_hash(user.password_hash, password):
            logger.info("Rejected login")
            raise InvalidCredentialsError()
        return user

    def update_user(self, json_user: t.Any) -> User:
        body = require_object(json_user)
        user_id = parse_body_id(body)
        email = string_field(body, "email")
        password = string_field(body, "password")
        if user_id is None:
            raise NotFoundError("User not found")

        user = self.__store.update_user(user_id,
                                        email=email or None,
                                        password_hash=generate_password_hash(password) if password else None)
        if user is None:
            raise NotFoundError("User not found")
        logger.info("Updated user %s", user_id)
        return user

    def delete_user(self, json_user: t.Any) -> None:
        user_id = parse_body_id(require_object(json_user))
        if user_id is None or not self.__store.delete_user(user_id):
            raise NotFoundError("User not found")
        logger.info("Deleted user %s", user_id)
