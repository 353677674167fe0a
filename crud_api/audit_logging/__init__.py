from crud_api.audit_logging.http_audit_logger import HTTPAuditLogger, Options

__all__ = ["HTTPAuditLogger", "Options"]
