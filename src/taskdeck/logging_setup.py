"""Logging configuration.

The TUI owns the terminal, so logs only go to a file.
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Path, level: int = logging.INFO) -> bool:
    """Send all log records at ``level`` or above to ``log_file``.

    Call this once, before the first log call. Existing root handlers are
    replaced so repeated calls don't duplicate output.

    Returns:
        True if the log file is in use, False if it could not be opened and
        logging was disabled instead.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as e:
        print(f"Warning: cannot write log file {log_file}: {e}", file=sys.stderr)
        root.addHandler(logging.NullHandler())
        return False

    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(file_handler)

    # Route warnings.warn(...) into the log file as 'py.warnings'
    logging.captureWarnings(True)
    return True
