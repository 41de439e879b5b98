"""
Logging setup for the API process
"""

import logging
import sys


class HumanFormatter(logging.Formatter):
    """Human-readable formatter with level colours when attached to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def __init__(self, *args, use_color: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if self.use_color:
            color = self.COLORS.get(record.levelname, self.RESET)
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname:<8}{self.RESET}"
        return super().format(record)


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """
    Configure and return the root logger.

    Replaces any handler installed by a previous call so the lifespan can be
    entered more than once (tests, reloads).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        HumanFormatter(
            fmt="%(asctime)s  %(levelname)s  %(name)s:%(lineno)d  %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            use_color=sys.stdout.isatty(),
        )
    )
    root_logger.addHandler(handler)

    return root_logger
