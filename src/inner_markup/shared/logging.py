"""Structured logging utilities for inner markup access.

This module provides correlation-aware logging so that every record emitted
while reading or replacing element content can be tied back to the caller's
operation and to the component that produced it.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from .result import DiagnosticEntry, DiagnosticSeverity

_SEVERITY_LEVELS = {
    DiagnosticSeverity.DEBUG: logging.DEBUG,
    DiagnosticSeverity.INFO: logging.INFO,
    DiagnosticSeverity.WARNING: logging.WARNING,
    DiagnosticSeverity.ERROR: logging.ERROR,
    DiagnosticSeverity.CRITICAL: logging.CRITICAL,
}


class CorrelationLogger:
    """Logger that stamps every record with correlation ID and component."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True
    ) -> None:
        """Log error message with correlation info."""
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)

    def diagnostics(
        self,
        entries: Iterable[DiagnosticEntry],
        level: int = logging.DEBUG
    ) -> int:
        """Log a batch of parse diagnostics.

        Each entry is logged at ``level`` or at its own severity, whichever is
        lower, so that suppressed diagnostics never show up as warnings.

        Args:
            entries: Diagnostics to log
            level: Ceiling log level for the batch

        Returns:
            Number of entries logged
        """
        count = 0
        for entry in entries:
            entry_level = min(_SEVERITY_LEVELS[entry.severity], level)
            self.logger.log(
                entry_level,
                entry.message,
                extra=self._get_extra({
                    "diagnostic_component": entry.component,
                    "position": entry.position,
                    "details": entry.details,
                }),
            )
            count += 1
        return count


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
