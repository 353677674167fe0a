import json
import logging
import os
import queue
import threading
import time
import typing as t
from datetime import datetime, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from botocore.utils import is_valid_endpoint_url
from flask import Flask, Request, Response, g, request

from crud_api.audit_logging.context import Context

logger = logging.getLogger(__name__)

_REDACTED = "***"
_REDACTED_FIELDS = {"password"}


class Options:
    AUDITLOG_ENABLED = "AUDITLOG_ENABLED"
    AUDITLOG_S3_DIRECTORY = "AUDITLOG_S3_DIRECTORY"
    AUDITLOG_S3_REGION = "AUDITLOG_S3_REGION"
    AUDITLOG_S3_BUCKET = "AUDITLOG_S3_BUCKET"
    AUDITLOG_S3_ENDPOINT = "AUDITLOG_S3_ENDPOINT"

    @staticmethod
    def from_env():
        enabled = os.getenv(Options.AUDITLOG_ENABLED, "false").lower() in {"1", "true", "yes"}
        s3_bucket = os.getenv(Options.AUDITLOG_S3_BUCKET, "crud-audit-local")
        s3_directory = os.getenv(Options.AUDITLOG_S3_DIRECTORY, "crud-api")
        s3_region = os.getenv(Options.AUDITLOG_S3_REGION, "us-east-1")
        s3_endpoint = os.getenv(Options.AUDITLOG_S3_ENDPOINT, None)
        return Options(enabled=enabled, s3_bucket=s3_bucket, s3_directory=s3_directory, s3_region=s3_region,
                       s3_endpoint=s3_endpoint)

    def __init__(self, enabled: bool = True, s3_bucket: str = "crud-audit-local", s3_directory: str = "crud-api",
                 s3_region: str = "us-east-1", s3_endpoint: t.Optional[str] = None):
        self.enabled = enabled
        self.bucket = s3_bucket
        self.directory = s3_directory
        self.region = s3_region
        self.endpoint = s3_endpoint


class HTTPAuditLogger(threading.Thread):
    """
    Writes one JSON audit record per inbound request and one per response to an S3 bucket.
    `log_request` and `log_response` are called from the request threads; they only marshal the record and put it
    on a queue. The actual S3 writes happen on this thread, so a slow or failing bucket never delays a request.
    Password fields in bodies are replaced before a record is queued.
    """

    class Record:
        def __init__(self, key: str, content: str):
            self.key = key
            self.content = content

    def __init__(self, opts: Options) -> None:
        super(HTTPAuditLogger, self).__init__(name="http-audit-logger", daemon=True)

        # validate fields
        if not opts.bucket:
            raise ValueError('s3_bucket not informed.')

        if not opts.directory:
            raise ValueError('s3_directory not informed.')

        if opts.endpoint:
            if not is_valid_endpoint_url(opts.endpoint):
                raise ValueError('s3_endpoint invalid.')

        if not opts.region:
            raise ValueError('s3_region not informed.')

        self.s3_bucket = opts.bucket
        self.s3_directory = opts.directory.rstrip("/")
        self.s3_endpoint = opts.endpoint
        self.s3_region = opts.region

        self.s3_client = boto3.client('s3', region_name=self.s3_region, endpoint_url=self.s3_endpoint)

        self.queue = queue.Queue()
        self.end_event = threading.Event()

    def init_app(self, app: Flask) -> None:
        """
        Registers request/response hooks on the application. Every route of `app` gets audited.
        """

        @app.before_request
        def _audit_request():
            g.audit_request_timestamp = _utc_now_str()
            self.log_request(req=request)

        @app.after_request
        def _audit_response(resp: Response) -> Response:
            self.log_response(req=request, resp=resp,
                              request_timestamp=g.get("audit_request_timestamp"))
            return resp

    def stop(self):
        self.end_event.set()
        self.join()

    def run(self):
        while not self.end_event.is_set():
            try:
                record = self.queue.get(timeout=0.1)
            except queue.Empty:
                continue

            self._do_s3_write(record)

    def log_request(self, req: Request) -> None:
        audit_id = HTTPAuditLogger._make_audit_id(req, False)
        metadata = HTTPAuditLogger._get_request_metadata(req)
        self._queue_record(audit_id, metadata, Context.from_request(req))

    def log_response(self, req: Request, resp: Response, request_timestamp: t.Optional[str] = None) -> None:
        audit_id = HTTPAuditLogger._make_audit_id(req, True)
        metadata = HTTPAuditLogger._get_response_metadata(req, resp, request_timestamp)
        self._queue_record(audit_id, metadata, Context.from_request(req))

    def _queue_record(self, audit_id: str, data: dict, context: t.Optional[Context]) -> None:
        if context is not None:
            data.update(context.get_audit_log_top_level_fields())
        # Set the identifier and Timestamp last to ensure it's not overridden.
        data["eventTimestamp"] = _utc_now_str()
        data["identifier"] = audit_id

        record = HTTPAuditLogger.Record(
            key=self._make_key(audit_id),
            content=json.dumps(data)
        )
        self.queue.put(record, block=False)

    def _do_s3_write(self, record: Record) -> None:
        """
        Save content to s3 bucket, should not be called in main thread
        """
        metadata = {}       # The metadata parameter can't be None or Boto3 raises an error
        try:
            s3_put_response = self.s3_client.put_object(
                Bucket=self.s3_bucket,
                Key=record.key,
                Body=record.content,
                ContentType="application/json; charset=utf-8",
                ContentLength=len(record.content.encode("utf-8")),
                ServerSideEncryption="AES256",
                Metadata=metadata
            )
        except (BotoCoreError, ClientError) as err:
            logger.error(f"Error writing audit log. {err}")
            return

        status_code = s3_put_response['ResponseMetadata']['HTTPStatusCode']
        if status_code != 200:
            logger.error(f"Unable to put audit log to s3, status {status_code}")
            return

        logger.info(f"Wrote audit log. s3://{self.s3_bucket}/{record.key}")

    def _make_key(self, audit_id: str) -> str:
        return f'{self.s3_directory}/{datetime.now(timezone.utc).strftime("%Y/%m/%d/%H/")}{audit_id}'

    @staticmethod
    def _get_request_metadata(req: Request) -> dict:
        metadata = {
            "host": req.host,
            "hostname": req.root_url,
            "method": req.method,
            "path": req.path,
            "protocol": req.environ.get('SERVER_PROTOCOL'),
            "query": req.query_string.decode("utf-8"),
            "headers": list(req.headers.keys()),
        }

        if req.content_length:
            metadata["body"] = HTTPAuditLogger._decode_body(req.get_data(cache=True))

        return metadata

    @staticmethod
    def _get_response_metadata(req: Request, response: Response, request_timestamp: t.Optional[str]) -> dict:
        metadata = {
            "requestMethod": req.method,
            "requestPath": req.path,
            "protocol": req.environ.get('SERVER_PROTOCOL'),
            "status": response.status,
            "statusCode": response.status_code,
            "headers": list(response.headers.keys()),
        }
        body = response.get_data()
        if body:
            metadata["body"] = HTTPAuditLogger._decode_body(body)
        if request_timestamp:
            metadata["requestTimestamp"] = request_timestamp

        return metadata

    @staticmethod
    def _make_audit_id(req: Request, is_response: bool) -> str:
        """
        The Audit ID should be unique, so for an HTTP message we append the nanosecond timestamp to the end
        """
        audit_id = "in{0}{1}{2}{3}".format(req.path, "" if req.path.endswith("/") else "/", req.method,
                                           "/response" if is_response else "/request")
        audit_id += f'_{time.time_ns()}'
        return audit_id

    @staticmethod
    def _decode_body(body: bytes) -> t.Any:
        """
        Returns the body as a JSON value with secrets redacted, or as text when it is not JSON
        """
        try:
            content = body.decode("utf-8")
        except UnicodeDecodeError:
            return "bodyReadError"
        try:
            return _redact(json.loads(content))
        except ValueError:
            return content


def _redact(value: t.Any) -> t.Any:
    if isinstance(value, dict):
        return {key: _REDACTED if key in _REDACTED_FIELDS else _redact(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


def _utc_now_str() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
