from http import HTTPStatus

from flask import Blueprint, current_app, request

from crud_api.errors import InvalidIdentifierError
from crud_api.service.parsing import parse_path_id
from crud_api.service.task import TaskService
from crud_api.utils import no_content_response, response_with_status, success_response

EXTENSION_KEY = "crud_api.task_service"

blueprint = Blueprint("tasks", __name__)


def _service() -> TaskService:
    return current_app.extensions[EXTENSION_KEY]


@blueprint.route("/tasks", methods=["GET", "POST"], provide_automatic_options=False)
def tasks():
    task_service = _service()
    if request.method == "POST":
        task = task_service.insert_task(request.get_json(force=True, silent=True))
        return response_with_status(task.to_json(), HTTPStatus.CREATED)

    return success_response([task.to_json() for task in task_service.list_tasks()])


@blueprint.route("/tasks/<task_id>", methods=["GET", "PUT", "DELETE"],
                 provide_automatic_options=False)
def task_by_id(task_id: str):
    task_service = _service()
    parsed_id = parse_path_id(task_id)

    if request.method == "GET":
        return success_response(task_service.get_task(parsed_id).to_json())
    if request.method == "PUT":
        task = task_service.update_task(parsed_id, request.get_json(force=True, silent=True))
        return success_response(task.to_json())

    task_service.delete_task(parsed_id)
    return no_content_response()


@blueprint.route("/tasks/", methods=["GET", "PUT", "DELETE"], provide_automatic_options=False)
def task_without_id():
    raise InvalidIdentifierError()
