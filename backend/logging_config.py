import logging
import sys

from config import LOG_LEVEL

LOG_FORMAT = "[%(levelname)s] [%(name)s] %(message)s"


def setup_logging(level: str | int | None = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(level or LOG_LEVEL)

    # Clear existing handlers so repeated setup does not duplicate output
    root.handlers.clear()
    root.addHandler(handler)
