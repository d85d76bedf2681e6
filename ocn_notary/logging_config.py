"""
Logging configuration for OCN Notary.

Provides structured JSON logging for custody audit trails and debugging.
The library never installs handlers by itself; applications call
configure_logging() once at startup.
"""

import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from . import config

# Context variable for correlation ID tracking (the OCPI x-correlation-id)
correlation_id_var: ContextVar[str] = ContextVar('correlation_id', default='')


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a consistent JSON format suitable for
    log aggregation systems like ELK, Splunk, or CloudWatch.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = correlation_id_var.get()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class AuditLogger:
    """
    Specialized logger for custody events.

    Records who signed what, which fields were stashed before a rewrite,
    and the outcome of every verification.
    """

    def __init__(self, name: str = "ocn_notary.audit"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, event_type: str, **kwargs) -> None:
        if not self._logger.isEnabledFor(level):
            return

        extra = {
            "event_type": event_type,
            "correlation_id": correlation_id_var.get(),
            **kwargs
        }

        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "",
            0,
            f"{event_type}: {kwargs.get('message', '')}",
            (),
            None
        )
        record.extra_fields = extra
        self._logger.handle(record)

    def request_signed(self, signatory: str, message_hash: str, field_count: int) -> None:
        """Log a completed signature."""
        self._log(
            logging.INFO,
            "REQUEST_SIGNED",
            signatory=signatory,
            hash=message_hash,
            field_count=field_count,
            message=f"Request signed by {signatory}"
        )

    def rewrite_stashed(self, signatory: str, paths: list, depth: int) -> None:
        """Log a stashed rewrite (custody transfer)."""
        self._log(
            logging.INFO,
            "REWRITE_STASHED",
            signatory=signatory,
            paths=paths,
            depth=depth,
            message=f"Stashed {len(paths)} field(s) signed by {signatory}"
        )

    def verification_passed(self, signatory: str, rewrites: int) -> None:
        """Log a successful verification."""
        self._log(
            logging.DEBUG,
            "VERIFICATION_PASSED",
            signatory=signatory,
            rewrites=rewrites,
            message=f"Signature of {signatory} verified"
        )

    def verification_failed(self, signatory: str, reason: str) -> None:
        """Log a failed verification."""
        self._log(
            logging.WARNING,
            "VERIFICATION_FAILED",
            signatory=signatory,
            reason=reason,
            message=f"Verification failed: {reason}"
        )

    def header_rejected(self, field: str, reason: str) -> None:
        """Log an undecodable signature header."""
        self._log(
            logging.WARNING,
            "HEADER_REJECTED",
            field=field,
            reason=reason,
            message=f"Signature header rejected: {reason}"
        )


def configure_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    log_file: Optional[str] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            defaults to OCN_NOTARY_LOG_LEVEL, or DEBUG when OCN_NOTARY_DEBUG is set
        json_format: Use JSON formatting, defaults to OCN_NOTARY_LOG_JSON
        log_file: Optional file path for log output
    """
    level = level or ("DEBUG" if config.is_debug() else config.LOG_LEVEL)
    json_format = config.LOG_JSON if json_format is None else json_format

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set the correlation ID for the current context.

    Args:
        correlation_id: ID to set, or None to generate one

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Get the current correlation ID."""
    return correlation_id_var.get()


@contextmanager
def correlation_scope(correlation_id: Optional[str]) -> Iterator[None]:
    """Bind a correlation ID for the duration of a block, if one is given."""
    if not correlation_id:
        yield
        return
    token = correlation_id_var.set(str(correlation_id))
    try:
        yield
    finally:
        correlation_id_var.reset(token)


# Global audit logger instance
audit_log = AuditLogger()
