"""
Queue-based logging for the triarb logger tree.

Records emitted under ``triarb.*`` are pushed onto a bounded queue and
written to stderr (and optionally a file) by a listener thread, so a
slow terminal or disk never stretches a scan.
"""

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue

from triarb.config.constants import LOG_DATE_FORMAT, LOG_FORMAT, MAX_LOG_QUEUE_SIZE


class MillisecondFormatter(logging.Formatter):
    """Appends ``.mmm`` to the formatted timestamp."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime(datefmt or LOG_DATE_FORMAT)
        return f"{stamp}.{int(record.msecs):03d}"


class QueuedLogger:
    """
    Owns the queue, handler and listener for one logger.

    Use as a context manager, or call :meth:`start` and :meth:`stop`
    explicitly. Stopping drains the queue and restores the logger's
    previous level.
    """

    def __init__(
        self,
        name: str,
        level: int = logging.INFO,
        log_file: Path | None = None,
    ) -> None:
        """
        Args:
            name: Logger to attach to.
            level: Threshold for the stderr handler.
            log_file: Optional file that receives every record from DEBUG up.
        """
        self._logger = logging.getLogger(name)
        self._console_level = level
        self._log_file = log_file
        self._queue: Queue[logging.LogRecord] = Queue(maxsize=MAX_LOG_QUEUE_SIZE)
        self._handler: QueueHandler | None = None
        self._listener: QueueListener | None = None
        self._saved_level = logging.NOTSET

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def running(self) -> bool:
        return self._listener is not None

    def _sinks(self) -> list[logging.Handler]:
        """Handlers driven by the listener thread."""
        formatter = MillisecondFormatter(LOG_FORMAT, LOG_DATE_FORMAT)

        console = logging.StreamHandler(sys.stderr)
        console.setLevel(self._console_level)
        console.setFormatter(formatter)
        sinks: list[logging.Handler] = [console]

        if self._log_file is not None:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            file_sink = logging.FileHandler(self._log_file, encoding="utf-8")
            file_sink.setLevel(logging.DEBUG)
            file_sink.setFormatter(formatter)
            sinks.append(file_sink)

        return sinks

    def start(self) -> None:
        if self.running:
            return

        self._saved_level = self._logger.level
        # The file sink wants DEBUG even when the console is quieter
        self._logger.setLevel(logging.DEBUG if self._log_file else self._console_level)

        self._handler = QueueHandler(self._queue)
        self._logger.addHandler(self._handler)

        self._listener = QueueListener(self._queue, *self._sinks(), respect_handler_level=True)
        self._listener.start()

    def stop(self) -> None:
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler = None

        if self._listener is not None:
            self._listener.stop()
            for sink in self._listener.handlers:
                sink.close()
            self._listener = None
            self._logger.setLevel(self._saved_level)

    def __enter__(self) -> "QueuedLogger":
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
) -> QueuedLogger:
    """
    Start queued logging for the ``triarb`` logger tree.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path.

    Returns:
        Running QueuedLogger; call ``stop()`` before exit to flush.
    """
    queued = QueuedLogger(
        name="triarb",
        level=getattr(logging, level.upper(), logging.INFO),
        log_file=log_file,
    )
    queued.start()
    return queued


@contextmanager
def log_duration(logger: logging.Logger, label: str, level: int = logging.DEBUG) -> Iterator[None]:
    """
    Log how long the wrapped block took, in milliseconds.

    Example:
        >>> with log_duration(logger, "scan"):
        ...     book.find_opportunities()
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.log(level, f"{label} took {(time.perf_counter() - start) * 1000:.2f}ms")
