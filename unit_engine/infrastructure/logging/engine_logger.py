"""
Engine Logging System

Buffered, thread-safe file logger for the unit engine. Standard library
``logging`` records from the ``UnitEngine`` logger hierarchy are routed
into the same file through EngineLogHandler.
"""

import logging
import threading
import time
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Any, Dict, Optional

ENGINE_LOGGER_NAME = 'UnitEngine'


class EngineLogger:
    """
    Buffered file logger

    Messages are collected in memory and written when the buffer fills up,
    when the flush interval elapses, or on an explicit flush.
    """

    def __init__(self, log_file: str = "unit_engine.log",
                 overwrite: bool = False, buffer_size: int = 100,
                 flush_interval: float = 5.0):
        """
        Initialize engine logger

        Args:
            log_file: Path to log file
            overwrite: Whether to overwrite existing log file
            buffer_size: Number of buffered messages before auto-flush
            flush_interval: Time interval for auto-flush (seconds)
        """
        self.log_file_path = Path(log_file)
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        self.buffer = StringIO()
        self.buffer_size = buffer_size
        self.buffer_count = 0
        self.flush_interval = flush_interval
        self.last_flush_time = time.time()

        self._lock = threading.Lock()

        self.stats = {
            'messages_logged': 0,
            'bytes_written': 0,
            'flush_count': 0,
            'errors': 0
        }

        self._initialize_log_file(overwrite)
        self._handler = self._setup_python_logging()

    def _initialize_log_file(self, overwrite: bool):
        """Initialize log file with header"""
        if overwrite and self.log_file_path.exists():
            self.log_file_path.unlink()

        header_lines = [
            "===== Unit Engine Log =====",
            f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Log File: {self.log_file_path}",
            "=" * 27
        ]

        with open(self.log_file_path, 'a', encoding='utf-8') as f:
            for line in header_lines:
                f.write(f"{line}\n")

    def log(self, message: str, level: str = "INFO", category: str = None):
        """
        Log message with timestamp

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
            category: Optional category for message
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        category_str = f"[{category}] " if category else ""
        formatted_msg = f"{timestamp} {level:7s} - {category_str}{message}"

        with self._lock:
            self.buffer.write(f"{formatted_msg}\n")
            self.buffer_count += 1
            self.stats['messages_logged'] += 1

            current_time = time.time()
            if (self.buffer_count >= self.buffer_size or
                    current_time - self.last_flush_time >= self.flush_interval):
                self._flush_buffer()

    def info(self, message: str, category: str = None):
        """Log info message"""
        self.log(message, "INFO", category)

    def warning(self, message: str, category: str = None):
        """Log warning message"""
        self.log(message, "WARNING", category)

    def error(self, message: str, category: str = None):
        """Log error message"""
        self.log(message, "ERROR", category)
        self.stats['errors'] += 1

    def debug(self, message: str, category: str = None):
        """Log debug message"""
        self.log(message, "DEBUG", category)

    def flush(self):
        """Force flush buffer to file"""
        with self._lock:
            self._flush_buffer()

    def _flush_buffer(self):
        """Write buffered messages; caller holds the lock"""
        if self.buffer_count == 0:
            return

        buffer_content = self.buffer.getvalue()

        try:
            with open(self.log_file_path, 'a', encoding='utf-8') as f:
                f.write(buffer_content)

            self.stats['bytes_written'] += len(buffer_content)
            self.stats['flush_count'] += 1
        finally:
            self.buffer.truncate(0)
            self.buffer.seek(0)
            self.buffer_count = 0
            self.last_flush_time = time.time()

    def _setup_python_logging(self) -> logging.Handler:
        """Route the UnitEngine logger hierarchy into this logger"""
        handler = EngineLogHandler(self)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter('%(name)s - %(message)s'))

        engine_logger = logging.getLogger(ENGINE_LOGGER_NAME)
        engine_logger.addHandler(handler)
        engine_logger.setLevel(logging.INFO)

        return handler

    def get_statistics(self) -> Dict[str, Any]:
        """Get logging statistics"""
        stats = self.stats.copy()
        stats.update({
            'buffer_size': self.buffer_count,
            'log_file_size': self.log_file_path.stat().st_size if self.log_file_path.exists() else 0
        })
        return stats

    def finalize(self):
        """Flush, write the footer and detach from standard logging"""
        logging.getLogger(ENGINE_LOGGER_NAME).removeHandler(self._handler)
        self.flush()

        footer_lines = [
            "=" * 27,
            f"Finished: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Total messages logged: {self.stats['messages_logged']}",
            "===== End of Log ====="
        ]

        with open(self.log_file_path, 'a', encoding='utf-8') as f:
            for line in footer_lines:
                f.write(f"{line}\n")


class EngineLogHandler(logging.Handler):
    """Logging handler that forwards records to an EngineLogger"""

    def __init__(self, engine_logger: EngineLogger):
        super().__init__()
        self.engine_logger = engine_logger

    def emit(self, record):
        try:
            self.engine_logger.log(self.format(record), record.levelname)
        except Exception:
            self.handleError(record)


# Global logger instance
_global_logger: Optional[EngineLogger] = None


def setup_logging(log_file: str = "unit_engine.log",
                  overwrite: bool = False,
                  verbose: bool = False) -> EngineLogger:
    """
    Setup global engine logging

    Args:
        log_file: Path to log file
        overwrite: Whether to overwrite existing log
        verbose: Enable debug-level records from the engine

    Returns:
        EngineLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = EngineLogger(log_file, overwrite)

    if verbose:
        logging.getLogger(ENGINE_LOGGER_NAME).setLevel(logging.DEBUG)

    return _global_logger


def get_logger() -> EngineLogger:
    """Get global logger instance"""
    if _global_logger is None:
        setup_logging()

    return _global_logger


def shutdown_logging():
    """Finalize and discard the global logger"""
    global _global_logger

    if _global_logger is not None:
        _global_logger.finalize()
        _global_logger = None
