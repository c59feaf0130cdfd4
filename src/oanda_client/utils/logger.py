import io
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


class DotMsFormatter(logging.Formatter):
    """Timestamps as ``YYYY-mm-dd HH:MM:SS.mmm``."""

    def formatTime(self, record, datefmt=None):
        ct = datetime.fromtimestamp(record.created)
        return ct.strftime("%Y-%m-%d %H:%M:%S") + f".{int(record.msecs):03d}"


class Utf8ConsoleHandler(logging.StreamHandler):
    """Console handler forced to UTF-8 so non-ASCII text doesn't raise
    UnicodeEncodeError on Windows consoles that default to cp1252.

    The wrapper is detached on close, leaving ``sys.stdout`` open.
    """

    def __init__(self):
        self._wrapped = hasattr(sys.stdout, "buffer")
        if self._wrapped:
            stream = io.TextIOWrapper(
                sys.stdout.buffer, encoding="utf-8", errors="replace", write_through=True
            )
        else:
            stream = sys.stdout
        super().__init__(stream)

    def close(self):
        self.acquire()
        try:
            if self._wrapped:
                if not self.stream.buffer.closed:
                    self.stream.flush()
                    self.stream.detach()
                self.stream = None
            self._wrapped = False
        finally:
            self.release()
            super().close()


def setup_logger(
    name: str = "oanda_client",
    log_path: Optional[str | Path] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure *name* with a UTF-8 console handler and, when *log_path* is
    given, a rotating file handler. Calling it again replaces the handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = DotMsFormatter(LOG_FORMAT)

    ch = Utf8ConsoleHandler()
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger
