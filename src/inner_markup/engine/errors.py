"""Process-wide parser error capture.

Parse diagnostics produced by the document engine either surface as
:class:`MarkupParseWarning` warnings or, while capture mode is on, are
collected in a buffer instead. The mode is a single process-wide switch; use
:class:`ErrorCaptureGuard` to flip it for a block of code and have it put back
afterwards. The switch is not thread-safe: callers sharing an engine across
threads must serialize access themselves.
"""

import warnings
from typing import Any, Iterable, List, Optional

from ..shared.result import DiagnosticEntry


class MarkupParseWarning(UserWarning):
    """Diagnostic reported by the document engine while parsing markup."""


class _CaptureState:
    def __init__(self) -> None:
        self.enabled = False
        self.entries: List[DiagnosticEntry] = []


_state = _CaptureState()


def use_internal_errors(enabled: bool) -> bool:
    """Switch error capture mode on or off.

    Args:
        enabled: True to collect diagnostics instead of warning

    Returns:
        The mode that was in effect before the call
    """
    previous = _state.enabled
    _state.enabled = bool(enabled)
    return previous


def is_capturing() -> bool:
    """Check whether capture mode is currently on."""
    return _state.enabled


def get_errors() -> List[DiagnosticEntry]:
    """Return a copy of the diagnostics captured so far."""
    return list(_state.entries)


def clear_errors() -> None:
    """Discard all captured diagnostics."""
    _state.entries.clear()


def report(error_log: Optional[Iterable[Any]], component: str) -> List[DiagnosticEntry]:
    """Route the entries of a parser error log.

    Args:
        error_log: lxml ``error_log`` of the parser (or exception) that ran
        component: Engine component that ran the parse

    Returns:
        The diagnostics built from the log
    """
    entries = [
        DiagnosticEntry.from_log_entry(entry, component)
        for entry in (error_log or ())
    ]
    if _state.enabled:
        _state.entries.extend(entries)
    else:
        for entry in entries:
            warnings.warn(str(entry), MarkupParseWarning, stacklevel=3)
    return entries


class ErrorCaptureGuard:
    """Scoped capture mode.

    Entering turns capture on; leaving clears captured diagnostics and
    restores whatever mode was active before, on every exit path.

    Example:
        >>> with ErrorCaptureGuard() as guard:
        ...     engine.parse_fragment(element, "<p>unclosed")
        ...     problems = guard.errors
    """

    def __init__(self) -> None:
        self._previous: Optional[bool] = None
        self._start = 0

    def __enter__(self) -> "ErrorCaptureGuard":
        self._previous = use_internal_errors(True)
        self._start = len(_state.entries)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        previous, self._previous = self._previous, None
        clear_errors()
        use_internal_errors(bool(previous))

    @property
    def active(self) -> bool:
        return self._previous is not None

    @property
    def errors(self) -> List[DiagnosticEntry]:
        """Diagnostics captured since this guard was entered."""
        return _state.entries[self._start:]
