import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: int = logging.INFO, stream=None):
    """
    Configures and sets up structured JSON logging for the application.

    This function initializes a JSON formatter that includes timestamp, level,
    logger name, message, trace_id, and span_id. It replaces the default
    handlers of the root logger with a single stream handler so that
    every component logs in the same format.

    Args:
        level: Minimum level for the root logger.
        stream: Destination for log records. Defaults to stdout.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(stream or sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in ["minio", "google_genai", "httpx"]:
        lib_logger = logging.getLogger(logger_name)
        lib_logger.setLevel(logging.WARNING)

    return root_logger
