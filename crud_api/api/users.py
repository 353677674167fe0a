from http import HTTPStatus

from flask import Blueprint, current_app, request

from crud_api.service.user import UserService
from crud_api.utils import no_content_response, response_with_status, success_response

EXTENSION_KEY = "crud_api.user_service"

blueprint = Blueprint("users", __name__)


def _service() -> UserService:
    return current_app.extensions[EXTENSION_KEY]


@blueprint.route("/register", methods=["POST"], provide_automatic_options=False)
def register():
    user = _service().register_user(request.get_json(force=True, silent=True))
    return response_with_status(user.to_json(), HTTPStatus.CREATED)


@blueprint.route("/login", methods=["POST"], provide_automatic_options=False)
def login():
    user = _service().login(request.get_json(force=True, silent=True))
    return success_response(user.to_json())


@blueprint.route("/update", methods=["PUT"], provide_automatic_options=False)
def update():
    user = _service().update_user(request.get_json(force=True, silent=True))
    return success_response(user.to_json())


@blueprint.route("/delete", methods=["DELETE"], provide_automatic_options=False)
def delete():
    _service().delete_user(request.get_json(force=True, silent=True))
    return no_content_response()
