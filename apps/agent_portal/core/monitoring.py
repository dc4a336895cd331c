"""
Diagnostics log buffer
Keeps the most recent portal log records in memory for the logs API
"""
import logging
import threading
from collections import deque
from datetime import datetime


class LogBufferHandler(logging.Handler):
    """Logging handler that appends records to a bounded deque"""

    def __init__(self, maxlen=1000, level=logging.INFO):
        super().__init__(level=level)
        self.entries = deque(maxlen=maxlen)
        self._entries_lock = threading.Lock()

    def emit(self, record):
        try:
            log_entry = {
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage()
            }
        except Exception:
            self.handleError(record)
            return
        with self._entries_lock:
            self.entries.append(log_entry)

    def get_entries(self):
        """Snapshot of buffered entries, oldest first"""
        with self._entries_lock:
            return list(self.entries)

    def clear(self):
        with self._entries_lock:
            self.entries.clear()


def install_log_buffer(logger_name, maxlen=1000):
    """Attach a single LogBufferHandler to the named logger and return it"""
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers:
        if isinstance(handler, LogBufferHandler):
            return handler

    handler = LogBufferHandler(maxlen=maxlen)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > logging.INFO:
        logger.setLevel(logging.INFO)
    return handler
