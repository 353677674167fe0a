from __future__ import annotations

import typing as t
from http import HTTPStatus

from flask import Response, jsonify, make_response


def success_response(data: t.Union[dict, list, str]) -> Response:
    return response_with_status(data=data, status=HTTPStatus.OK)


def response_with_status(data: t.Union[dict, list, str], status: int) -> Response:
    return make_response(jsonify(data), status)


def error_response(message: str, status: int) -> Response:
    return response_with_status({"error": message}, status)


def no_content_response() -> Response:
    return make_response("", HTTPStatus.NO_CONTENT)
