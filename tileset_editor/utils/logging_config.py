"""
Logging configuration for the tileset editor.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from .constants import LOGGER_NAME


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        formatted = super().format(record)

        # Color only the level name
        if record.levelname in formatted:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{reset}", 1
            )

        return formatted


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    use_colors: bool = True,
) -> None:
    """
    Configure console (and optionally rotating file) logging.

    Args:
        level: Console level, as a logging constant or a name like "debug".
        log_file: If given, DEBUG and above are also written here.
        use_colors: Color level names on the console.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)
    package_logger.handlers.clear()
    package_logger.propagate = False

    fmt = "%(asctime)s : %(levelname)-8s : %(name)s : %(message)s"
    if use_colors:
        console_formatter: logging.Formatter = ColoredFormatter(fmt=fmt, datefmt="%H:%M:%S")
    else:
        console_formatter = logging.Formatter(fmt=fmt, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)
    package_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
        except OSError as e:
            package_logger.warning("Could not set up file logging at %s: %s", log_path, e)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s;%(levelname)s;%(name)s;%(lineno)d;%(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            package_logger.addHandler(file_handler)

    package_logger.debug("Logging initialized at level %s", logging.getLevelName(level))
