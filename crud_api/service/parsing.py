import re
import typing as t

from crud_api.errors import InvalidIdentifierError, MalformedBodyError

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_path_id(raw: str) -> int:
    """
    Parses an id taken from a URL path segment. Must be a positive base-10 integer.
    """
    if not _ID_PATTERN.fullmatch(raw or ""):
        raise InvalidIdentifierError()
    record_id = int(raw)
    if record_id <= 0:
        raise InvalidIdentifierError()
    return record_id


def parse_body_id(body: dict) -> t.Optional[int]:
    """
    Returns the body's `id`, or None when the body has no `id` at all.
    """
    if "id" not in body:
        return None
    record_id = body["id"]
    # bool is an int subclass, but `true` is not an id
    if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id <= 0:
        raise InvalidIdentifierError()
    return record_id


def require_object(body: t.Any) -> dict:
    if not isinstance(body, dict):
        raise MalformedBodyError("Request body must be a JSON object")
    return body


def string_field(body: dict, key: str, default: str = "") -> str:
    value = body.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise MalformedBodyError(f"Field '{key}' must be a string")
    return value
