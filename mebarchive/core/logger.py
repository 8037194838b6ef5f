"""
Logging and Error Handling System

This module provides centralized logging configuration and per-job warning
tracking for meb-archive.
"""

import logging
import logging.handlers
import os
import sys
import threading
from datetime import datetime
from typing import Optional, Dict, Any, List
from pathlib import Path


APP_NAME = "meb-archive"


class ArchiveLogger:
    """
    Centralized logging system for meb-archive.

    Console output for the person running the archive, plus rotating files
    with full detail and with errors only.
    """

    def __init__(self, log_dir: str = "logs", app_name: str = APP_NAME):
        """
        Initialize the logging system.

        Args:
            log_dir: Directory to store log files
            app_name: Name of the application for log formatting
        """
        self.log_dir = Path(log_dir)
        self.app_name = app_name
        self.loggers: Dict[str, logging.Logger] = {}

        self.log_dir.mkdir(parents=True, exist_ok=True)

    def setup_logger(self, level: int = logging.INFO) -> logging.Logger:
        """
        Set up the main application logger with file and console handlers.

        Args:
            level: Console logging level (default: INFO)

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(self.app_name)
        logger.setLevel(logging.DEBUG)
        self.loggers['main'] = logger

        # Re-initialisation replaces the previous run's handlers
        package_logger = logging.getLogger("mebarchive")
        for handler in set(logger.handlers) | set(package_logger.handlers):
            logger.removeHandler(handler)
            package_logger.removeHandler(handler)
            handler.close()

        detailed_formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(threadName)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%H:%M:%S'
        )

        log_file = self.log_dir / f"{self.app_name}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)

        error_file = self.log_dir / f"{self.app_name}_errors.log"
        error_handler = logging.handlers.RotatingFileHandler(
            error_file,
            maxBytes=5*1024*1024,  # 5MB
            backupCount=3,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(detailed_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
        logger.addHandler(error_handler)

        # Library modules log under "mebarchive.*"; route them to the same handlers
        package_logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            package_logger.addHandler(handler)

        return logger

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            name: Name of the component

        Returns:
            Logger instance for the component
        """
        full_name = f"{self.app_name}.{name}"

        if full_name not in self.loggers:
            logger = logging.getLogger(full_name)
            logger.setLevel(logging.DEBUG)
            self.loggers[full_name] = logger

        return self.loggers[full_name]

    def log_system_info(self):
        """Log system information for debugging."""
        logger = self.get_logger('system')

        logger.debug("=== meb-archive started ===")
        logger.debug(f"Python version: {sys.version}")
        logger.debug(f"Platform: {sys.platform}")
        logger.debug(f"Working directory: {os.getcwd()}")
        logger.debug(f"Log directory: {self.log_dir.absolute()}")


class ErrorTracker:
    """
    Collects the warnings raised by failed jobs during one run.

    Workers report concurrently, so appends are serialized.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.warnings: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def log_warning(self,
                    message: str,
                    context: str = None,
                    url: str = None) -> str:
        """
        Log a warning with context information.

        Args:
            message: Warning message
            context: Stage where the warning occurred (fetch, parse, ...)
            url: URL being processed when the warning occurred

        Returns:
            Warning ID for tracking
        """
        with self._lock:
            warning_id = f"WARN_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{len(self.warnings):03d}"
            self.warnings.append({
                'id': warning_id,
                'timestamp': datetime.now(),
                'message': message,
                'context': context,
                'url': url
            })

        log_message = f"[{warning_id}] {message}"
        if context:
            log_message += f" (Context: {context})"
        if url:
            log_message += f" (URL: {url})"

        self.logger.warning(log_message)

        return warning_id

    def get_error_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the warnings recorded so far.

        Returns:
            Dictionary with totals, counts per context and the latest entries
        """
        with self._lock:
            by_context: Dict[str, int] = {}
            for warning in self.warnings:
                key = warning['context'] or 'unknown'
                by_context[key] = by_context.get(key, 0) + 1
            return {
                'total_warnings': len(self.warnings),
                'by_context': by_context,
                'recent_warnings': self.warnings[-5:],
            }


# Global logger instance
_logger_instance: Optional[ArchiveLogger] = None


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Name of the component (optional)

    Returns:
        Logger instance
    """
    global _logger_instance

    if _logger_instance is None:
        # Unconfigured: plain child loggers, handlers come from the caller
        return logging.getLogger(f"{APP_NAME}.{name}" if name else APP_NAME)

    if name:
        return _logger_instance.get_logger(name)
    return _logger_instance.loggers.get('main') or logging.getLogger(APP_NAME)


def initialize_logging(log_dir: str = "logs", level: int = logging.INFO) -> logging.Logger:
    """
    Initialize the global logging system.

    Args:
        log_dir: Directory for log files
        level: Console logging level

    Returns:
        The main application logger
    """
    global _logger_instance
    _logger_instance = ArchiveLogger(log_dir)
    logger = _logger_instance.setup_logger(level)
    _logger_instance.log_system_info()
    return logger

