import logging
import typing as t
from http import HTTPStatus

from flask import Flask, Response, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from crud_api import config
from crud_api.api import tasks as tasks_api
from crud_api.api import users as users_api
from crud_api.audit_logging import HTTPAuditLogger
from crud_api.audit_logging.context import Context
from crud_api.errors import ApiError
from crud_api.service.task import TaskService
from crud_api.service.user import UserService
from crud_api.store.task import TaskStore
from crud_api.store.user import UserStore
from crud_api.utils import error_response

logger = logging.getLogger(__name__)


def create_app(options: t.Optional[config.Options] = None,
               task_store: t.Optional[TaskStore] = None,
               user_store: t.Optional[UserStore] = None,
               audit_logger: t.Optional[HTTPAuditLogger] = None) -> Flask:
    """
    Builds the application. Each call gets its own stores, so two applications never share records.
    Stores and the audit logger can be passed in; otherwise they are created from `options`.
    """
    if options is None:
        options = config.Options.from_env()

    application = Flask(__name__)
    application.json.sort_keys = False

    if config.TASKS in options.services:
        if task_store is None:
            task_store = TaskStore()
        application.extensions[tasks_api.EXTENSION_KEY] = TaskService(task_store)
        application.register_blueprint(tasks_api.blueprint)
    if config.USERS in options.services:
        if user_store is None:
            user_store = UserStore()
        application.extensions[users_api.EXTENSION_KEY] = UserService(user_store)
        application.register_blueprint(users_api.blueprint)

    _register_request_hooks(application)

    if audit_logger is None and options.audit.enabled:
        audit_logger = HTTPAuditLogger(opts=options.audit)
        audit_logger.start()
    if audit_logger is not None:
        audit_logger.init_app(application)

    _register_error_handlers(application)

    logger.info("Created application with services: %s", ", ".join(options.services))
    return application


def _register_request_hooks(application: Flask) -> None:
    @application.before_request
    def _attach_context():
        Context(request).set_in_request(request)
        logger.debug(f"{request.path} - {request.method}")

    @application.after_request
    def _echo_context(resp: Response) -> Response:
        context = Context.from_request(request)
        if context is not None:
            context.add_response_headers(resp)
        return resp


def _register_error_handlers(application: Flask) -> None:
    @application.errorhandler(ApiError)
    def _api_error(err: ApiError) -> Response:
        return error_response(err.message, err.status)

    @application.errorhandler(HTTPException)
    def _http_error(err: HTTPException) -> Response:
        resp = error_response(err.description, err.code)
        if isinstance(err, MethodNotAllowed) and err.valid_methods:
            resp.headers["Allow"] = ", ".join(err.valid_methods)
        return resp

    @application.errorhandler(Exception)
    def _unexpected_error(err: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR)
