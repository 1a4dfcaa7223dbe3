"""Parse strategies for replacing inner markup.

A strategy turns a markup value into nodes ready to be appended to a target
element. Strategies are tried in order and the first successful outcome wins:
the strict fragment parse handles well-formed markup, and the lenient document
parse picks up whatever markup the strict parse rejected.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..engine.document import LxmlDocumentEngine, child_nodes
from ..shared.config import AccessorConfig
from ..shared.logging import get_logger
from ..shared.result import ParseOutcome


class ParseStrategy(ABC):
    """Base class for a single parse attempt."""

    name = "abstract"

    def __init__(
        self,
        engine: LxmlDocumentEngine,
        config: Optional[AccessorConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.engine = engine
        self.config = config or engine.config
        self.logger = get_logger(__name__, correlation_id, self.name)

    @abstractmethod
    def parse(self, element: Any, markup: str) -> ParseOutcome:
        """Parse ``markup`` into nodes owned by ``element``'s document.

        Args:
            element: Target element the nodes will be appended to
            markup: Trimmed, non-blank markup text

        Returns:
            ParseOutcome; ``success`` False means the next strategy should run
        """


class StrictFragmentStrategy(ParseStrategy):
    """Well-formed XML fragment parse in the target element's context."""

    name = "strict_fragment"

    def parse(self, element: Any, markup: str) -> ParseOutcome:
        fragment = self.engine.parse_fragment(element, markup)
        if fragment is None:
            return ParseOutcome.failed(self.name, "Markup is not well-formed")
        # An empty fragment is still a successful parse
        return ParseOutcome(strategy=self.name, success=True, nodes=list(fragment.nodes))


class LenientDocumentStrategy(ParseStrategy):
    """Tolerant HTML parse of the markup wrapped in a scratch document.

    The markup is wrapped in a non-standard element so that it can be told
    apart from the ``<html>``/``<body>`` scaffolding the HTML parser adds, and
    is prefixed with a charset declaration so non-ASCII text survives. The
    wrapper's children are imported into the target document; nothing from
    the scratch document is attached directly.
    """

    name = "lenient_document"

    def build_payload(self, markup: str) -> bytes:
        lenient = self.config.lenient
        payload = '<meta charset="{charset}"><{tag}>{markup}</{tag}>'.format(
            charset=lenient.charset,
            tag=lenient.wrapper_tag,
            markup=markup,
        )
        return payload.encode(lenient.charset, errors="xmlcharrefreplace")

    def parse(self, element: Any, markup: str) -> ParseOutcome:
        scratch = self.engine.parse_document(self.build_payload(markup), lenient=True)
        if scratch is None:
            return ParseOutcome.failed(self.name, "Lenient document parse failed")

        wrapper = self.engine.find_element(scratch, self.config.lenient.wrapper_tag)
        if wrapper is None:
            return ParseOutcome.failed(
                self.name,
                f"Wrapper <{self.config.lenient.wrapper_tag}> not found in parsed document",
            )

        nodes = [self.engine.import_node(child, deep=True) for child in child_nodes(wrapper)]
        self.logger.debug(
            "Imported lenient parse result",
            extra={"node_count": len(nodes)}
        )
        return ParseOutcome(strategy=self.name, success=True, nodes=nodes)


def default_strategies(
    engine: LxmlDocumentEngine,
    config: Optional[AccessorConfig] = None,
    correlation_id: Optional[str] = None
) -> List[ParseStrategy]:
    """Build the strategy chain for ``config``: strict, then lenient if enabled."""
    config = config or engine.config
    chain: List[ParseStrategy] = [StrictFragmentStrategy(engine, config, correlation_id)]
    if config.lenient.enabled:
        chain.append(LenientDocumentStrategy(engine, config, correlation_id))
    return chain
