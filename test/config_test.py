import logging

import pytest

from crud_api.audit_logging.formatter import LOG_FMT, CustomFormatter
from crud_api.config import Options


def test_defaults(monkeypatch):
    for name in ("APP_HOST", "APP_PORT", "APP_LOG_LEVEL", "APP_SERVICES", "AUDITLOG_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    options = Options.from_env()

    assert options.host == "0.0.0.0"
    assert options.port == 8080
    assert options.log_level == "INFO"
    assert options.services == ("tasks", "users")
    assert not options.audit.enabled


def test_from_env(monkeypatch):
    monkeypatch.setenv("APP_PORT", "9000")
    monkeypatch.setenv("APP_SERVICES", "users")
    monkeypatch.setenv("APP_LOG_LEVEL", "debug")
    monkeypatch.setenv("AUDITLOG_ENABLED", "true")
    monkeypatch.setenv("AUDITLOG_S3_BUCKET", "audit")

    options = Options.from_env()

    assert options.port == 9000
    assert options.services == ("users",)
    assert options.log_level == "DEBUG"
    assert options.audit.enabled
    assert options.audit.bucket == "audit"


@pytest.mark.parametrize("env", [{"APP_PORT": "http"}, {"APP_SERVICES": "tasks,orders"}, {"APP_SERVICES": ","}])
def test_invalid_env(monkeypatch, env):
    for name, value in env.items():
        monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        Options.from_env()


def test_formatter_outside_request():
    record = logging.LogRecord("crud_api", logging.INFO, __file__, 1, "hello", None, None)

    line = CustomFormatter(LOG_FMT).format(record)

    assert '"correlationId": "-"' in line
    assert '"message": "hello"' in line


def test_formatter_inside_request(application):
    with application.test_request_context("/tasks", headers={"Correlation-Id": "abc"}):
        application.preprocess_request()
        record = logging.LogRecord("crud_api", logging.INFO, __file__, 1, "hello", None, None)

        line = CustomFormatter(LOG_FMT).format(record)

    assert '"correlationId": "abc"' in line
