import logging
from typing import Union


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: Union[str, int] = "INFO") -> int:
    """
    Configure root logging for command-line use and return the numeric level.

    Library code never calls this; applications embedding the static stage
    configure logging their own way and get our records through the
    ``httpstatic`` and ``httpstatic.access`` loggers.
    """
    if isinstance(level, str):
        numeric = getattr(logging, level.upper(), None)
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = numeric

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger("httpstatic").setLevel(level)
    return level
