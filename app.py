import logging
import sys

from crud_api.application import create_app
from crud_api.audit_logging.formatter import configure_logging
from crud_api.config import Options

options = Options.from_env()
configure_logging(options.log_level)
root_logger = logging.getLogger()

application = create_app(options)


if __name__ == "__main__":
    root_logger.info("*** APPLICATION NAME %s", application.name)
    root_logger.info("Server starting at %s:%s", options.host, options.port)
    try:
        application.run(host=options.host, port=options.port, threaded=True)
    except OSError as err:
        root_logger.error("Error starting server: %s", err)
        sys.exit(1)
