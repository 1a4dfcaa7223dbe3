"""Document engine layer.

Wraps lxml behind the capabilities inner markup access needs and owns the
process-wide parser error capture mode.
"""

from .document import (
    Fragment,
    LxmlDocumentEngine,
    child_nodes,
    is_element,
    is_text,
    owner_document,
)
from .errors import (
    ErrorCaptureGuard,
    MarkupParseWarning,
    clear_errors,
    get_errors,
    is_capturing,
    use_internal_errors,
)

__all__ = [
    "Fragment",
    "LxmlDocumentEngine",
    "child_nodes",
    "is_element",
    "is_text",
    "owner_document",
    "ErrorCaptureGuard",
    "MarkupParseWarning",
    "clear_errors",
    "get_errors",
    "is_capturing",
    "use_internal_errors",
]
