"""lxml-backed document engine.

The engine supplies the leaf capabilities the accessor is built from: strict
fragment parsing, lenient whole-document parsing, subtree serialization and
node import. It also presents lxml's text/tail storage as DOM-style child
nodes, where character data between elements is a node of its own (a plain
``str``), so that children can be listed, removed and appended in document
order.
"""

import copy
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union
from xml.sax.saxutils import escape, quoteattr

from lxml import etree

from ..shared.config import AccessorConfig
from ..shared.logging import get_logger
from ..shared.result import ChildNode
from . import errors

# Characters lxml refuses in text: C0 controls other than tab, LF and CR,
# lone surrogates and the U+FFFE/U+FFFF non-characters
XML_INCOMPATIBLE = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def is_text(node: ChildNode) -> bool:
    """Check whether a child node is a text segment."""
    return isinstance(node, str)


def is_element(node: Any) -> bool:
    """Check whether ``node`` is an lxml element (not a comment, PI or entity)."""
    return etree.iselement(node) and isinstance(node.tag, str)


def child_nodes(element: Any) -> List[ChildNode]:
    """List the child nodes of ``element`` in document order.

    Text segments are returned as strings; empty segments are omitted.
    """
    nodes: List[ChildNode] = []
    if element.text:
        nodes.append(element.text)
    for child in element:
        nodes.append(child)
        if child.tail:
            nodes.append(child.tail)
    return nodes


def owner_document(node: Any) -> Optional[Any]:
    """Return the document (``_ElementTree``) owning ``node``, if any."""
    if not etree.iselement(node):
        return None
    return node.getroottree()


@dataclass
class Fragment:
    """Detached, parentless run of nodes produced by parsing markup."""

    nodes: List[ChildNode] = field(default_factory=list)


class LxmlDocumentEngine:
    """Document engine on top of ``lxml.etree``.

    Every parse reports its error log through :mod:`inner_markup.engine.errors`,
    so diagnostics are either warned about or captured depending on the
    process-wide capture mode.
    """

    def __init__(
        self,
        config: Optional[AccessorConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or AccessorConfig()
        self.logger = get_logger(__name__, correlation_id, "document_engine")

    def parse_fragment(self, context: Any, markup: str) -> Optional[Fragment]:
        """Parse well-formed markup into a detached fragment.

        The markup is parsed inside a synthetic context element. When
        ``inherit_namespaces`` is on, that element redeclares the namespaces in
        scope at ``context`` so prefixed markup resolves as it would in place.

        Args:
            context: Element the fragment is destined for
            markup: Markup text; must be well-formed XML content

        Returns:
            Fragment with the parsed nodes, or None if the markup is not
            well-formed
        """
        strict = self.config.strict
        source = "<{tag}{decls}>{markup}</{tag}>".format(
            tag=strict.context_tag,
            decls=self._namespace_declarations(context) if strict.inherit_namespaces else "",
            markup=markup,
        )
        parser = etree.XMLParser(
            recover=False,
            no_network=True,
            resolve_entities=False,
            huge_tree=strict.huge_tree,
        )

        try:
            root = etree.fromstring(source, parser)
        except etree.XMLSyntaxError as e:
            errors.report(e.error_log, "strict_fragment")
            self.logger.debug(
                "Strict fragment parse rejected markup",
                extra={"error": str(e), "markup_length": len(markup)}
            )
            return None

        errors.report(parser.error_log, "strict_fragment")
        return Fragment(child_nodes(root))

    def parse_document(
        self,
        markup: Union[str, bytes],
        lenient: bool = True
    ) -> Optional[Any]:
        """Parse a standalone document.

        Args:
            markup: Document text; bytes are decoded by the parser using any
                charset declaration they carry
            lenient: Parse with the tolerant HTML parser instead of strict XML

        Returns:
            A new ``_ElementTree`` owning the parsed nodes, or None if parsing
            failed outright
        """
        component = "lenient_document" if lenient else "strict_document"
        if lenient:
            parser = etree.HTMLParser(recover=True, no_network=True)
        else:
            parser = etree.XMLParser(recover=False, no_network=True, resolve_entities=False)

        try:
            root = etree.fromstring(markup, parser)
        except (etree.LxmlError, ValueError) as e:
            errors.report(getattr(e, "error_log", None), component)
            self.logger.debug(
                "Document parse failed",
                extra={"error": str(e), "lenient": lenient}
            )
            return None

        errors.report(parser.error_log, component)
        if root is None:
            return None
        return root.getroottree()

    def serialize_subtree(self, node: ChildNode, method: Optional[str] = None) -> str:
        """Serialize a child node (and its subtree) back to markup text.

        The node's tail is not included; tails are separate child nodes.
        """
        if is_text(node):
            return escape(node, {"\r": "&#13;"})
        return etree.tostring(
            node,
            encoding="unicode",
            method=method or self.config.serialization_method,
            with_tail=False,
        )

    def import_node(self, node: ChildNode, deep: bool = True) -> ChildNode:
        """Copy a node so it can be attached to another document.

        lxml assigns ownership on attachment, so the copy belongs to whichever
        document it is appended into and shares nothing with the source.

        Args:
            node: Node to copy
            deep: Copy the whole subtree instead of just the node itself

        Returns:
            The detached copy; text segments come back with characters lxml
            cannot store removed
        """
        if is_text(node):
            return XML_INCOMPATIBLE.sub("", node)
        if deep:
            clone = copy.deepcopy(node)
        elif is_element(node):
            clone = etree.Element(node.tag, attrib=dict(node.attrib), nsmap=node.nsmap)
        elif node.tag is etree.Comment:
            clone = etree.Comment(node.text)
        elif node.tag is etree.ProcessingInstruction:
            clone = etree.ProcessingInstruction(node.target, node.text)
        else:
            clone = copy.copy(node)
        clone.tail = None
        return clone

    def append_child(self, element: Any, node: ChildNode) -> None:
        """Append a child node to ``element``."""
        if is_text(node):
            if not node:
                return
            if len(element):
                last = element[-1]
                last.tail = (last.tail or "") + node
            else:
                element.text = (element.text or "") + node
            return
        node.tail = None
        element.append(node)

    def remove_children(self, element: Any) -> int:
        """Remove every child node of ``element``.

        Child elements go last to first so indexes stay valid while the child
        list shrinks; the leading text goes last.

        Returns:
            Number of child nodes removed
        """
        removed = len(child_nodes(element))
        for index in range(len(element) - 1, -1, -1):
            del element[index]
        element.text = None
        return removed

    @staticmethod
    def find_element(document: Any, tag: str) -> Optional[Any]:
        """Return the first element named ``tag`` in ``document``."""
        return next(document.iter(tag), None)

    @staticmethod
    def _namespace_declarations(context: Any) -> str:
        if not is_element(context):
            return ""
        decls = []
        for prefix, uri in context.nsmap.items():
            name = "xmlns" if prefix is None else f"xmlns:{prefix}"
            decls.append(f" {name}={quoteattr(uri)}")
        return "".join(decls)
