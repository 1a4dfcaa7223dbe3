"""Element classes exposing a JavaScript-style ``innerHTML`` property.

lxml creates element proxies from the class lookup registered on the parser
that built a document, so documents loaded through :func:`parse_xml` or
:func:`parse_html` hand out elements with the property attached::

    doc = parse_html("<div><p>Para 1</p><p>Para 2</p></div>")
    div = doc.find(".//div")
    div.innerHTML                # '<p>Para 1</p><p>Para 2</p>'
    div.innerHTML = '<a href="http://fivefilters.org">FiveFilters.org</a>'

Elements of any other lxml tree can use the module-level functions in
:mod:`inner_markup.accessor.inner_content` instead.
"""

import warnings
from typing import Any, Optional, Union

import lxml.html
from lxml import etree

from .inner_content import InnerContentAccessor, _get_default_accessor

INNER_HTML = "innerHTML"


class UndefinedPropertyWarning(UserWarning):
    """Issued when the generic property accessor is asked for an unknown name."""


class InnerHTMLMixin:
    """Adds ``innerHTML`` access to an lxml element class.

    Set ``accessor`` on a subclass to use a configured
    :class:`InnerContentAccessor`; otherwise the shared default is used.
    """

    accessor: Optional[InnerContentAccessor] = None

    def _inner_content_accessor(self) -> InnerContentAccessor:
        return self.accessor or _get_default_accessor()

    def get_inner_html(self) -> str:
        return self._inner_content_accessor().get_inner_content(self)

    def set_inner_html(self, value: Any) -> None:
        self._inner_content_accessor().set_inner_content(self, value)

    @property
    def innerHTML(self) -> str:
        return self.get_inner_html()

    @innerHTML.setter
    def innerHTML(self, value: Any) -> None:
        self.set_inner_html(value)

    inner_html = innerHTML

    def get_property(self, name: str) -> Optional[str]:
        """Read a property by name.

        Only ``innerHTML`` is known; any other name warns with the caller's
        location and returns None.
        """
        if name == INNER_HTML:
            return self.get_inner_html()
        warnings.warn(
            f"Undefined property via get_property(): {name}",
            UndefinedPropertyWarning,
            stacklevel=2,
        )
        return None

    def set_property(self, name: str, value: Any) -> None:
        """Write a property by name; unknown names warn and do nothing."""
        if name != INNER_HTML:
            warnings.warn(
                f"Undefined property via set_property(): {name}",
                UndefinedPropertyWarning,
                stacklevel=2,
            )
            return
        self.set_inner_html(value)

    def __str__(self) -> str:
        return f"[{self.tag}]"


class InnerHTMLElement(InnerHTMLMixin, etree.ElementBase):
    """XML element with ``innerHTML`` access."""


class InnerHTMLHtmlElement(InnerHTMLMixin, lxml.html.HtmlElement):
    """HTML element with ``innerHTML`` access and the ``lxml.html`` helpers."""


def xml_parser(**kwargs: Any) -> etree.XMLParser:
    """Build an XML parser whose elements are :class:`InnerHTMLElement`."""
    kwargs.setdefault("no_network", True)
    kwargs.setdefault("resolve_entities", False)
    parser = etree.XMLParser(**kwargs)
    parser.set_element_class_lookup(
        etree.ElementDefaultClassLookup(element=InnerHTMLElement)
    )
    return parser


def html_parser(**kwargs: Any) -> lxml.html.HTMLParser:
    """Build an HTML parser whose elements are :class:`InnerHTMLHtmlElement`."""
    kwargs.setdefault("no_network", True)
    parser = lxml.html.HTMLParser(**kwargs)
    parser.set_element_class_lookup(
        etree.ElementDefaultClassLookup(element=InnerHTMLHtmlElement)
    )
    return parser


def parse_xml(text: Union[str, bytes], **kwargs: Any) -> Any:
    """Load an XML document whose elements expose ``innerHTML``.

    Args:
        text: XML document text
        **kwargs: Extra ``XMLParser`` options

    Returns:
        The document as an ``_ElementTree``
    """
    return etree.fromstring(text, xml_parser(**kwargs)).getroottree()


def parse_html(text: Union[str, bytes], **kwargs: Any) -> Any:
    """Load an HTML document whose elements expose ``innerHTML``.

    Args:
        text: HTML document or fragment text; fragments get ``<html>`` and
            ``<body>`` scaffolding
        **kwargs: Extra ``HTMLParser`` options

    Returns:
        The document as an ``_ElementTree``
    """
    root = lxml.html.document_fromstring(text, parser=html_parser(**kwargs))
    return root.getroottree()
