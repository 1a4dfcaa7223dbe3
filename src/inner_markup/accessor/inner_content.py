"""Reading and replacing the inner markup of an element.

:class:`InnerContentAccessor` implements the browser-style ``innerHTML``
contract on top of the document engine:

- reading serializes every child node in document order and concatenates the
  results;
- writing clears the element, then runs the parse strategy chain (strict
  fragment first, lenient document second) with parser diagnostics captured,
  and appends whatever the first successful strategy produced.

Neither direction raises for bad markup; the worst case is an empty element.
"""

from typing import Any, Iterable, Optional

from ..engine.document import LxmlDocumentEngine, child_nodes, is_element
from ..engine.errors import ErrorCaptureGuard
from ..shared.config import AccessorConfig
from ..shared.logging import get_logger
from ..shared.result import ParseOutcome
from .strategies import ParseStrategy, default_strategies

# Characters stripped from both ends of a markup value
TRIM_CHARACTERS = " \t\n\r\0\x0b"


class InnerContentAccessor:
    """Get/set the serialized inner content of elements.

    Args:
        config: Accessor configuration (defaults to ``AccessorConfig()``)
        engine: Document engine; built from ``config`` when omitted
        strategies: Parse strategy chain; built from ``config`` when omitted
        correlation_id: Optional correlation ID for request tracking

    Example:
        >>> accessor = InnerContentAccessor()
        >>> accessor.set_inner_content(div, "<p>Para 1<p>Para 2")
        >>> accessor.get_inner_content(div)
        '<p>Para 1</p><p>Para 2</p>'
    """

    def __init__(
        self,
        config: Optional[AccessorConfig] = None,
        engine: Optional[LxmlDocumentEngine] = None,
        strategies: Optional[Iterable[ParseStrategy]] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        if config is None:
            config = engine.config if engine is not None else AccessorConfig()
        self.config = config
        self.correlation_id = correlation_id
        self.engine = engine or LxmlDocumentEngine(config, correlation_id)
        if strategies is None:
            strategies = default_strategies(self.engine, config, correlation_id)
        self.strategies = list(strategies)
        self.logger = get_logger(__name__, correlation_id, "inner_content")

    def get_inner_content(self, element: Any) -> str:
        """Serialize the children of ``element``.

        Args:
            element: Element to read

        Returns:
            Concatenated markup of the child nodes; empty string for elements
            without children and for anything that is not an element
        """
        if not is_element(element):
            return ""
        return "".join(
            self.engine.serialize_subtree(node) for node in child_nodes(element)
        )

    def clear(self, element: Any) -> int:
        """Remove every child node of ``element``.

        Returns:
            Number of child nodes removed
        """
        if not is_element(element):
            return 0
        return self.engine.remove_children(element)

    def set_inner_content(self, element: Any, markup: Any) -> None:
        """Replace the children of ``element`` with nodes parsed from ``markup``.

        The element is always cleared first. Blank markup (after trimming,
        empty or ``"0"``) leaves it empty. Markup rejected by every strategy
        also leaves it empty; no parse error reaches the caller.

        Args:
            element: Element whose content is replaced
            markup: Markup text; None and False count as blank, bytes are decoded as
                UTF-8 and other values are converted with ``str()``
        """
        if not is_element(element):
            self.logger.warning(
                "Ignoring inner content assignment on a non-element node",
                extra={"node_type": type(element).__name__}
            )
            return

        removed = self.clear(element)
        value = self.normalize(markup)
        if self.is_blank(value):
            self.logger.debug(
                "Blank markup; element left empty",
                extra={"removed_nodes": removed}
            )
            return

        with ErrorCaptureGuard() as guard:
            outcome = self._run_strategies(element, value)
            if self.config.log_suppressed_diagnostics:
                self.logger.diagnostics(guard.errors)

        if outcome is None:
            self.logger.debug(
                "All parse strategies failed; element left empty",
                extra={"strategies": [strategy.name for strategy in self.strategies]}
            )
            return

        try:
            for node in outcome.nodes:
                self.engine.append_child(element, node)
        except ValueError:
            # All or nothing: drop whatever was attached before the bad node
            self.logger.error(
                "Parsed nodes could not be attached; element left empty",
                extra={"strategy": outcome.strategy}
            )
            self.clear(element)

    @staticmethod
    def normalize(markup: Any) -> str:
        """Coerce a markup value to text and trim it."""
        if markup is None or markup is False:
            return ""
        if isinstance(markup, bytes):
            markup = markup.decode("utf-8", errors="replace")
        elif not isinstance(markup, str):
            markup = str(markup)
        return markup.strip(TRIM_CHARACTERS)

    def is_blank(self, value: str) -> bool:
        """Check whether a trimmed markup value means "no content"."""
        if value == "":
            return True
        return self.config.treat_zero_as_empty and value == "0"

    def _run_strategies(self, element: Any, markup: str) -> Optional[ParseOutcome]:
        for strategy in self.strategies:
            try:
                outcome = strategy.parse(element, markup)
            except Exception:
                self.logger.error(
                    "Parse strategy raised; trying next strategy",
                    extra={"strategy": strategy.name}
                )
                continue

            if outcome.success:
                self.logger.debug(
                    "Parse strategy succeeded",
                    extra={"strategy": strategy.name, "node_count": len(outcome.nodes)}
                )
                return outcome

            self.logger.debug(
                "Parse strategy failed",
                extra={"strategy": strategy.name, "reason": outcome.message}
            )
        return None


_default_accessor: Optional[InnerContentAccessor] = None


def _get_default_accessor() -> InnerContentAccessor:
    global _default_accessor
    if _default_accessor is None:
        _default_accessor = InnerContentAccessor()
    return _default_accessor


def get_inner_html(element: Any) -> str:
    """Return the inner markup of ``element`` using the default accessor."""
    return _get_default_accessor().get_inner_content(element)


def set_inner_html(element: Any, markup: Any) -> None:
    """Replace the inner markup of ``element`` using the default accessor."""
    _get_default_accessor().set_inner_content(element, markup)
