"""Inner markup accessor: get/set semantics, parse strategies and element classes."""

from .inner_content import (
    InnerContentAccessor,
    get_inner_html,
    set_inner_html,
)
from .strategies import (
    LenientDocumentStrategy,
    ParseStrategy,
    StrictFragmentStrategy,
    default_strategies,
)
from .element import (
    InnerHTMLElement,
    InnerHTMLHtmlElement,
    InnerHTMLMixin,
    UndefinedPropertyWarning,
    html_parser,
    parse_html,
    parse_xml,
    xml_parser,
)

__all__ = [
    "InnerContentAccessor",
    "get_inner_html",
    "set_inner_html",
    "LenientDocumentStrategy",
    "ParseStrategy",
    "StrictFragmentStrategy",
    "default_strategies",
    "InnerHTMLElement",
    "InnerHTMLHtmlElement",
    "InnerHTMLMixin",
    "UndefinedPropertyWarning",
    "html_parser",
    "parse_html",
    "parse_xml",
    "xml_parser",
]
