"""
Logging Configuration

All service loggers live under the "refscout" namespace, so the service's
verbosity can be tuned apart from the HTTP and LLM client libraries.
"""
import logging
import sys
from typing import Iterable

LOGGER_NAMESPACE = "refscout"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "langchain", "langchain_openai")


def _resolve_level(level: str, default: int = logging.INFO) -> int:
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


def setup_logging(
    level: str = "INFO",
    library_level: str = "WARNING",
    quiet: Iterable[str] = NOISY_LOGGERS
) -> None:
    """
    Configure console logging for the service.

    Args:
        level: Log level for the root and "refscout" loggers
        library_level: Log level applied to the loggers named in `quiet`
        quiet: Third-party logger names to turn down
    """
    log_level = _resolve_level(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger(LOGGER_NAMESPACE).setLevel(log_level)

    library_log_level = _resolve_level(library_level, logging.WARNING)
    for name in quiet:
        logging.getLogger(name).setLevel(library_log_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the "refscout" namespace.

    Module names from the package are used as-is; anything else (scripts,
    "__main__") is nested under the namespace.
    """
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)
