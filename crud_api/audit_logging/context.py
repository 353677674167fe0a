from __future__ import annotations

import logging
import typing as t
import uuid

from flask import Request, Response, request

logger = logging.getLogger(__name__)


class Context:
    """
    Per-request state attached to the Flask request: currently the correlation id that ties log lines and
    audit records of one request together.
    """
    # HTTP Header Keys
    __CORRELATION_ID_KEY = "Correlation-Id"

    # Audit Logger Top level Key names:
    _CORRELATION_ID_LOG_KEY = "correlationId"

    __REQUEST_ATTRIBUTE_NAME = "crud_api_context"

    @staticmethod
    def from_request(req: t.Optional[Request] = None, silence_outside_context: bool = False) -> t.Optional[Context]:
        """
        Get the Context object from the Flask Request.  This will always return the same Context per HTTP request.
        Returns None if the Context doesn't exist yet, or when called outside of a request (e.g. another thread).
        @param req: Flask request (Optional)
        @param silence_outside_context: If set to True, don't log that this call happened outside a request.
        @return: Context object or None
        """
        try:
            if req is None:
                req = request
            return getattr(req, Context.__REQUEST_ATTRIBUTE_NAME, None)
        except RuntimeError as err:
            if 'Working outside of request context' not in str(err):
                raise
            if not silence_outside_context:
                logger.debug("Attempted to get Context outside of Request processing.")
        return None

    def __init__(self, req: Request) -> None:
        self.req = None
        self.correlation_id = Context._get_header_value(req, Context.__CORRELATION_ID_KEY)
        if not self.correlation_id:
            self.correlation_id = uuid.uuid4().hex
            logger.debug(f'No {Context.__CORRELATION_ID_KEY} header found, generated {self.correlation_id}.')

    def set_in_request(self, req: Request) -> Context:
        setattr(req, Context.__REQUEST_ATTRIBUTE_NAME, self)
        self.req = req
        return self

    def get_audit_log_top_level_fields(self) -> t.Dict[str, t.Any]:
        return {Context._CORRELATION_ID_LOG_KEY: self.correlation_id}

    def add_response_headers(self, resp: Response) -> None:
        resp.headers[Context.__CORRELATION_ID_KEY] = self.correlation_id

    @staticmethod
    def _get_header_value(req: Request, key: str, default: t.Optional[str] = None) -> t.Optional[str]:
        val = req.headers.get(key, default)
        if val is None:
            return None
        return val.strip()
