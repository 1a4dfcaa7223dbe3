"""Shared utilities for inner markup access.

This module provides configuration objects, result and diagnostic types, and
logging helpers used by the engine, the accessor and the CLI.
"""

from .result import (
    ChildNode,
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseOutcome,
)
from .config import (
    AccessorConfig,
    ConfigError,
    ConfigValidationError,
    LenientParseConfig,
    StrictParseConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ChildNode",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseOutcome",
    "AccessorConfig",
    "ConfigError",
    "ConfigValidationError",
    "LenientParseConfig",
    "StrictParseConfig",
    "CorrelationLogger",
    "get_logger",
]
