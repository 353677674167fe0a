import os
import typing as t

from crud_api.audit_logging.http_audit_logger import Options as AuditOptions

TASKS = "tasks"
USERS = "users"
_KNOWN_SERVICES = (TASKS, USERS)


class Options:
    APP_HOST = "APP_HOST"
    APP_PORT = "APP_PORT"
    APP_LOG_LEVEL = "APP_LOG_LEVEL"
    APP_SERVICES = "APP_SERVICES"

    @staticmethod
    def from_env():
        host = os.getenv(Options.APP_HOST, "0.0.0.0")
        raw_port = os.getenv(Options.APP_PORT, "8080")
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"{Options.APP_PORT} must be an integer, got {raw_port!r}")
        log_level = os.getenv(Options.APP_LOG_LEVEL, "INFO").upper()
        services = [s.strip() for s in os.getenv(Options.APP_SERVICES, "tasks,users").split(",") if s.strip()]
        return Options(host=host, port=port, log_level=log_level, services=services, audit=AuditOptions.from_env())

    def __init__(self, host: str = "0.0.0.0", port: int = 8080, log_level: str = "INFO",
                 services: t.Sequence[str] = _KNOWN_SERVICES, audit: t.Optional[AuditOptions] = None):
        unknown = [s for s in services if s not in _KNOWN_SERVICES]
        if unknown:
            raise ValueError(f"Unknown services: {', '.join(unknown)}")
        if not services:
            raise ValueError("At least one service must be enabled")

        self.host = host
        self.port = port
        self.log_level = log_level
        self.services = tuple(services)
        self.audit = audit if audit is not None else AuditOptions(enabled=False)
