import logging

from crud_api.audit_logging.context import Context

LOG_FMT = ("{\"time\": \"%(asctime)s\", \"name\": \"[%(name)s]\", \"filename\": \"[%(filename)s]\", "
           "\"lineno\": \"[%(lineno)s]\", \"levelname\": \"%(levelname)s\", "
           "\"correlationId\": \"%(correlationId)s\", \"message\": \"%(message)s\"}")


class CustomFormatter(logging.Formatter):
    """Adds the current request's correlation id to every record as `correlationId`."""
    log_record_name = "correlationId"

    def __init__(self, *args, **kwargs):
        super(CustomFormatter, self).__init__(*args, **kwargs)

    def format(self, record):
        if not hasattr(record, self.log_record_name):
            context = Context.from_request(silence_outside_context=True)
            setattr(record, self.log_record_name, context.correlation_id if context else "-")

        return super(CustomFormatter, self).format(record)


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(CustomFormatter(LOG_FMT))
    logging.basicConfig(level=level, handlers=[handler])
