"""Logging for Tally.

One "tally" logger with a dated file handler and a console handler. Both pass
records through CredentialFilter so Basic credentials never reach a log.
"""

import logging
import re
from datetime import date
from pathlib import Path
from config import Config

LOGGER_NAME = "tally"

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s - %(message)s"

_BASIC_CREDENTIALS = re.compile(r"(Basic\s+)[A-Za-z0-9+/=]+")


def redact_credentials(text: str) -> str:
    """Replace the encoded part of any ``Basic <token>`` with asterisks."""
    return _BASIC_CREDENTIALS.sub(r"\1***", text)


class CredentialFilter(logging.Filter):
    """Rewrites a record's message with credentials redacted."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_credentials(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def log_file_path(config: Config, day: date = None) -> Path:
    """Path of the log file for a day: ``log_dir/tally-YYYY-MM-DD.log``."""
    day = day or date.today()
    return config.log_dir / f"{LOGGER_NAME}-{day.isoformat()}.log"


def setup_logging(config: Config) -> logging.Logger:
    """Configure the tally logger from the application config.

    Safe to call more than once; earlier handlers are replaced.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file_path(config))
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    for handler in (file_handler, console_handler):
        handler.setLevel(config.log_level)
        handler.addFilter(CredentialFilter())
        logger.addHandler(handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The tally logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
