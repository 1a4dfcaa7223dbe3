"""Result objects and diagnostic types for inner markup access.

Diagnostics describe what the document engine reported while parsing a
markup value; parse outcomes describe what a single parse strategy produced
for a target element.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Union


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Warnings about questionable markup
    ERROR = auto()      # Recoverable markup errors
    CRITICAL = auto()   # Fatal errors that aborted a parse

    @classmethod
    def from_level_name(cls, level_name: str) -> "DiagnosticSeverity":
        """Map an lxml error log level name to a severity."""
        return _LEVEL_NAMES.get(level_name.upper(), cls.ERROR)


_LEVEL_NAMES = {
    "NONE": DiagnosticSeverity.INFO,
    "WARNING": DiagnosticSeverity.WARNING,
    "ERROR": DiagnosticSeverity.ERROR,
    "FATAL": DiagnosticSeverity.CRITICAL,
}


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    @classmethod
    def from_log_entry(cls, entry: Any, component: str) -> "DiagnosticEntry":
        """Build a diagnostic from an lxml ``_LogEntry``.

        Args:
            entry: Entry taken from a parser's ``error_log``
            component: Name of the engine component that ran the parse

        Returns:
            DiagnosticEntry carrying the entry's message, position and origin
        """
        message = (entry.message or "").strip() or entry.type_name
        return cls(
            severity=DiagnosticSeverity.from_level_name(entry.level_name),
            message=message,
            component=component,
            position={"line": entry.line, "column": entry.column},
            details={"domain": entry.domain_name, "type": entry.type_name},
        )

    def __str__(self) -> str:
        if self.position:
            return (
                f"{self.severity.name}: {self.message} "
                f"(line {self.position['line']}, column {self.position['column']})"
            )
        return f"{self.severity.name}: {self.message}"


# A child node as seen through the engine: text segments are plain strings,
# everything else is an lxml node.
ChildNode = Union[str, Any]


@dataclass
class ParseOutcome:
    """Outcome of a single parse strategy applied to a target element.

    ``nodes`` are ready to be appended: they already belong to the target
    element's document (moved out of a fragment or imported from a scratch
    document).
    """

    strategy: str
    success: bool
    nodes: List[ChildNode] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def has_nodes(self) -> bool:
        """Check whether the outcome carries anything to append."""
        return bool(self.nodes)

    @classmethod
    def failed(cls, strategy: str, message: str) -> "ParseOutcome":
        """Create a failed outcome."""
        return cls(strategy=strategy, success=False, message=message)
