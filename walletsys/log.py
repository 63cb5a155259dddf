"""Process-wide logger that writes to stderr and to level-split log files."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_ERROR_FILE = "./log/wallet-system-error.log"
DEFAULT_INFO_FILE = "./log/wallet-system-info.log"

_FORMAT = 'time="%(asctime)s" level=%(levelname)s msg="%(message)s"'
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_logger = logging.getLogger("walletsys")


class _StderrHandler(logging.Handler):
    """Handler that always writes to the current ``sys.stderr``."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = sys.stderr
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


class _LevelFilter(logging.Filter):
    def __init__(self, levels):
        super().__init__()
        self._levels = frozenset(levels)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno in self._levels


def get_path_map(error_file_path: str, info_file_path: str) -> dict[int, str]:
    """Map each logging level to the file its records are written to."""
    return {
        logging.CRITICAL: error_file_path,
        logging.ERROR: error_file_path,
        logging.WARNING: error_file_path,
        logging.INFO: info_file_path,
        logging.DEBUG: info_file_path,
    }


def init(error_file_path: str = DEFAULT_ERROR_FILE, info_file_path: str = DEFAULT_INFO_FILE) -> None:
    """(Re)configure the logger: debug level, stderr output and per-level files."""
    for handler in list(_logger.handlers):
        _logger.removeHandler(handler)
        handler.close()

    _logger.setLevel(logging.DEBUG)
    _logger.propagate = False
    formatter = logging.Formatter(_FORMAT, _DATE_FORMAT)

    stream_handler = _StderrHandler()
    stream_handler.setFormatter(formatter)
    _logger.addHandler(stream_handler)

    levels_by_path: dict[str, list[int]] = {}
    for level, path in get_path_map(error_file_path, info_file_path).items():
        levels_by_path.setdefault(path, []).append(level)

    for path, levels in levels_by_path.items():
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8", delay=True)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_LevelFilter(levels))
        _logger.addHandler(file_handler)


def _message(args) -> str:
    return " ".join(str(arg) for arg in args)


def debugln(*args) -> None:
    _logger.debug(_message(args))


def infoln(*args) -> None:
    _logger.info(_message(args))


def warnln(*args) -> None:
    _logger.warning(_message(args))


def errorln(*args) -> None:
    _logger.error(_message(args))


def fatalln(*args) -> None:
    """Log at the highest level and exit the process with status 1."""
    _logger.critical(_message(args))
    raise SystemExit(1)


def panicln(*args) -> None:
    """Log at the highest level and raise ``RuntimeError`` with the message."""
    message = _message(args)
    _logger.critical(message)
    raise RuntimeError(message)