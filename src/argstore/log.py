# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Logging of argstore.

The library only emits records below the ``argstore`` logger: ``DEBUG``
for changes of the stored arguments and ``TRACE`` for every flag match.
Programs call :func:`setup_logging` once to see them on stderr, e.g.::

    $ ARGSTORE_LOGLEVEL=trace argstore-example --int 3
    12:30:45.123 store TRACE ['-i|--int|int']: alias '--int' matched argument 1: '--int'
"""

from __future__ import annotations

import atexit
import datetime
import logging
import os
import sys
from enum import IntEnum, unique
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import Any, cast

LOGLEVEL_ENV = "ARGSTORE_LOGLEVEL"
ROOT_LOGGER = "argstore"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


@unique
class Loglevel(IntEnum):
    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = TRACE

    @classmethod
    def from_str(cls, string: str) -> Loglevel:
        """Accepts a numeric python loglevel (``10``) or a
        case insensitive level name (``debug``).
        """
        if string.isnumeric():
            return cls(int(string, 0))

        try:
            return cls[string.upper()]
        except KeyError:
            raise ValueError(f"{string} not a valid loglevel") from None


def component_name(logger_name: str) -> str:
    """``argstore.store`` -> ``store``; foreign loggers keep their name."""
    prefix = ROOT_LOGGER + "."
    if logger_name.startswith(prefix):
        return logger_name[len(prefix) :]
    return logger_name


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.datetime.fromtimestamp(record.created)
        msg = dt.strftime("%H:%M:%S.%f")[:-3]
        msg += f" {component_name(record.name)} {record.levelname}"
        # Set by ArgStore for records concerning a single query.
        if (spec := getattr(record, "spec", None)) is not None:
            msg += f" [{spec!r}]"
        msg += f": {record.getMessage()}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        return msg


def setup_logging(level: Loglevel | None = None, logger_name: str = ROOT_LOGGER) -> None:
    """Sends the records of ``logger_name`` to stderr.

    :param level: The loglevel of the stderr handler. If None,
                  ``ARGSTORE_LOGLEVEL`` is read, falling back
                  to ``INFO``.
    :raises ValueError: ``ARGSTORE_LOGLEVEL`` is no valid loglevel.
    """
    if level is None:
        if (raw := os.getenv(LOGLEVEL_ENV)) is not None:
            level = Loglevel.from_str(raw)
        else:
            level = Loglevel.INFO

    logger = logging.getLogger(logger_name)
    # Filtering happens in the stderr handler.
    logger.setLevel(Loglevel.TRACE)

    while len(logger.handlers) > 0:
        logger.handlers[0].close()
        logger.removeHandler(logger.handlers[0])

    # Queried arguments are logged from the caller's thread; the
    # listener thread does the actual writing.
    queue: Queue[Any] = Queue()
    logger.addHandler(QueueHandler(queue))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(_ConsoleFormatter())

    listener = QueueListener(queue, stderr_handler, respect_handler_level=True)
    listener.start()
    atexit.register(listener.stop)


class Logger(logging.Logger):
    def trace(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(Loglevel.TRACE):
            self._log(Loglevel.TRACE, msg, args, **kwargs)


logging.setLoggerClass(Logger)


def get_logger(name: str) -> Logger:
    return cast(Logger, logging.getLogger(name))
