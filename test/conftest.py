import pytest

from crud_api.application import create_app
from crud_api.audit_logging.http_audit_logger import Options as AuditOptions
from crud_api.config import Options


@pytest.fixture()
def options():
    return Options(audit=AuditOptions(enabled=False))


@pytest.fixture()
def application(options):
    application = create_app(options)
    application.config.update(TESTING=True)

    yield application


@pytest.fixture()
def client(application):
    return application.test_client()
