"""Inner Markup.

Browser-style ``innerHTML`` reading and writing for lxml element trees.
Well-formed markup is parsed as an XML fragment; anything else falls back to a
tolerant HTML parse whose nodes are imported into the target document. Bad
markup never raises; the worst case is an empty element.

Progressive API Disclosure:
- Level 1: Simple functions - get_inner_html(), set_inner_html()
- Level 2: Documents with an ``innerHTML`` property - parse_xml(), parse_html()
- Level 3: Configured accessor - InnerContentAccessor with AccessorConfig
- Level 4: Custom parse strategies - ParseStrategy subclasses
"""

__version__ = "0.1.0"
__author__ = "Inner Markup Team"

# Level 1: Simple functions
# Level 2: Element classes and document loaders
# Level 3: Configured accessor
from .accessor import (
    InnerContentAccessor,
    InnerHTMLElement,
    InnerHTMLHtmlElement,
    ParseStrategy,
    UndefinedPropertyWarning,
    get_inner_html,
    parse_html,
    parse_xml,
    set_inner_html,
)
from .engine import ErrorCaptureGuard, LxmlDocumentEngine, MarkupParseWarning
from .shared.config import AccessorConfig, ConfigError, ConfigValidationError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "get_inner_html",
    "set_inner_html",

    # Level 2: Element classes and document loaders
    "InnerHTMLElement",
    "InnerHTMLHtmlElement",
    "parse_html",
    "parse_xml",

    # Level 3 and 4: Accessor, engine and strategies
    "InnerContentAccessor",
    "LxmlDocumentEngine",
    "ParseStrategy",
    "ErrorCaptureGuard",

    # Configuration
    "AccessorConfig",
    "ConfigError",
    "ConfigValidationError",

    # Warnings
    "MarkupParseWarning",
    "UndefinedPropertyWarning",
]
