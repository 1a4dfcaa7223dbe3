"""Tests for reading and replacing inner markup."""

import logging
import warnings
from unittest.mock import Mock

import pytest
from lxml import etree

from inner_markup.accessor import (
    InnerContentAccessor,
    ParseStrategy,
    get_inner_html,
    set_inner_html,
)
from inner_markup.engine import LxmlDocumentEngine, is_capturing, use_internal_errors
from inner_markup.shared.config import AccessorConfig
from inner_markup.shared.result import ParseOutcome


@pytest.fixture
def accessor() -> InnerContentAccessor:
    return InnerContentAccessor()


@pytest.fixture
def root():
    return etree.fromstring("<root><div>old <i>stuff</i> here</div></root>")


@pytest.fixture
def div(root):
    return root[0]


class _StubStrategy(ParseStrategy):
    name = "stub"

    def __init__(self, engine, outcome):
        super().__init__(engine)
        self.outcome = outcome
        self.calls = 0

    def parse(self, element, markup):
        self.calls += 1
        return self.outcome


class TestGetInnerContent:
    """Test reading inner markup."""

    def test_mixed_content(self, accessor, div):
        """Test text and elements are serialized in order."""
        assert accessor.get_inner_content(div) == "old <i>stuff</i> here"

    def test_no_children(self, accessor):
        """Test an empty element yields an empty string."""
        assert accessor.get_inner_content(etree.Element("empty")) == ""

    def test_escapes_text(self, accessor):
        """Test character data is escaped."""
        el = etree.Element("p")
        el.text = "1 < 2 & 3"

        assert accessor.get_inner_content(el) == "1 &lt; 2 &amp; 3"

    def test_comments_included(self, accessor):
        """Test comments are child nodes too."""
        el = etree.fromstring("<p>a<!--c-->b</p>")

        assert accessor.get_inner_content(el) == "a<!--c-->b"

    @pytest.mark.parametrize("node", [None, "text", etree.Comment("c")])
    def test_degenerate_input(self, accessor, node):
        """Test non-elements read as empty."""
        assert accessor.get_inner_content(node) == ""

    def test_no_side_effects(self, accessor, div, root):
        """Test reading leaves the tree untouched."""
        before = etree.tostring(root)
        accessor.get_inner_content(div)

        assert etree.tostring(root) == before


class TestSetInnerContentStrict:
    """Test replacement with well-formed markup."""

    @pytest.mark.parametrize("markup", [
        '<p class="x">Hello <b>world</b></p>',
        "plain text",
        "lead <b>x</b> tail",
        "<a/><b/>",
        "a &amp; b &lt; c",
        "<!-- note --><p>after</p>",
    ])
    def test_round_trip(self, accessor, div, markup):
        """Test well-formed markup reads back unchanged."""
        accessor.set_inner_content(div, markup)

        assert accessor.get_inner_content(div) == markup

    def test_replaces_not_appends(self, accessor, div):
        """Test a second assignment replaces the first."""
        accessor.set_inner_content(div, "<a>x</a>")
        accessor.set_inner_content(div, "<b>y</b>")

        assert accessor.get_inner_content(div) == "<b>y</b>"
        assert div.find("a") is None

    def test_existing_content_cleared(self, accessor, div, root):
        """Test old text, elements and tails are all gone."""
        accessor.set_inner_content(div, "<em>new</em>")

        assert etree.tostring(root, encoding="unicode") == "<root><div><em>new</em></div></root>"

    def test_surrounding_whitespace_trimmed(self, accessor, div):
        """Test ASCII whitespace around the markup is dropped."""
        accessor.set_inner_content(div, "\n\t  <b>x</b> \r\n\x0b\0")

        assert accessor.get_inner_content(div) == "<b>x</b>"

    def test_non_breaking_space_not_trimmed(self, accessor, div):
        """Test only the fixed trim set is stripped."""
        accessor.set_inner_content(div, "\u00a0<b>x</b>")

        assert accessor.get_inner_content(div) == "\u00a0<b>x</b>"

    def test_nodes_owned_by_target_document(self, accessor, div, root):
        """Test parsed nodes end up in the element's document."""
        accessor.set_inner_content(div, "<p><span>deep</span></p>")

        for node in div.iter():
            assert node.getroottree().getroot() is root

    def test_namespaced_markup(self, accessor):
        """Test prefixes declared on ancestors can be used."""
        doc_root = etree.fromstring('<root xmlns:x="urn:x"><div/></root>')
        target = doc_root[0]
        accessor.set_inner_content(target, "<x:item>1</x:item>")

        assert target[0].tag == "{urn:x}item"

    def test_bytes_and_non_string_values(self, accessor, div):
        """Test values are coerced to text."""
        accessor.set_inner_content(div, "<b>é</b>".encode("utf-8"))
        assert accessor.get_inner_content(div) == "<b>é</b>"

        accessor.set_inner_content(div, 42)
        assert accessor.get_inner_content(div) == "42"


class TestSetInnerContentBlank:
    """Test blank markup values."""

    @pytest.mark.parametrize("markup", ["", "   ", "\n\t", None, False, "0", " 0 ", 0])
    def test_blank_clears(self, accessor, div, markup):
        """Test blank values leave the element empty."""
        accessor.set_inner_content(div, markup)

        assert accessor.get_inner_content(div) == ""
        assert len(div) == 0
        assert div.text is None

    def test_other_falsy_looking_values_kept(self, accessor, div):
        """Test only the exact "0" counts as blank."""
        accessor.set_inner_content(div, "00")
        assert accessor.get_inner_content(div) == "00"

        accessor.set_inner_content(div, "0.0")
        assert accessor.get_inner_content(div) == "0.0"

        accessor.set_inner_content(div, True)
        assert accessor.get_inner_content(div) == "True"

    def test_zero_kept_when_configured(self, div):
        """Test the "0" rule can be switched off."""
        accessor = InnerContentAccessor(AccessorConfig(treat_zero_as_empty=False))
        accessor.set_inner_content(div, "0")

        assert accessor.get_inner_content(div) == "0"


class TestSetInnerContentLenient:
    """Test the lenient fallback."""

    def test_unclosed_paragraphs(self, accessor, div):
        """Test HTML-ish markup is recovered via the fallback."""
        accessor.set_inner_content(div, "<p>Para 1<p>Para 2")

        result = accessor.get_inner_content(div)
        assert "Para 1" in result
        assert "Para 2" in result
        assert [child.tag for child in div] == ["p", "p"]

    def test_html_entities(self, accessor, div):
        """Test HTML named entities are resolved by the fallback."""
        accessor.set_inner_content(div, "caf&eacute; <b>ok</b>")

        assert accessor.get_inner_content(div) == "café <b>ok</b>"

    def test_non_ascii_survives(self, accessor, div):
        """Test the charset declaration keeps non-ASCII text intact."""
        accessor.set_inner_content(div, "<p>Grüße<p>日本語")

        result = accessor.get_inner_content(div)
        assert "Grüße" in result
        assert "日本語" in result

    def test_wrapper_not_kept(self, accessor, div):
        """Test neither the wrapper nor html/body scaffolding leaks in."""
        accessor.set_inner_content(div, "<p>x<br>y")

        result = accessor.get_inner_content(div)
        assert "htmlfragment" not in result
        assert "<body" not in result
        assert "<meta" not in result

    def test_cross_document_safety(self, div, root):
        """Test imported nodes belong to the target and survive scratch mutation."""
        engine = LxmlDocumentEngine()
        accessor = InnerContentAccessor(engine=engine)
        scratch_documents = []
        original_parse_document = engine.parse_document

        def recording_parse_document(markup, lenient=True):
            document = original_parse_document(markup, lenient=lenient)
            scratch_documents.append(document)
            return document

        engine.parse_document = recording_parse_document
        accessor.set_inner_content(div, "<p>one<p>two")
        before = accessor.get_inner_content(div)

        assert len(scratch_documents) == 1
        for node in div.iter():
            assert node.getroottree().getroot() is root

        wrapper = scratch_documents[0].find(".//htmlfragment")
        wrapper.clear()
        wrapper.append(etree.Element("intruder"))

        assert accessor.get_inner_content(div) == before
        assert div.find(".//intruder") is None

    def test_no_warnings_escape(self, accessor, div):
        """Test parser diagnostics are not surfaced to the caller."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            accessor.set_inner_content(div, "<p>bad &nbsp; <b>markup")

        assert accessor.get_inner_content(div) != ""

    def test_control_characters_in_text(self, accessor, div):
        """Test text the HTML parser keeps but XML cannot hold is cleaned."""
        accessor.set_inner_content(div, "a\x0cb")

        assert accessor.get_inner_content(div) == "ab"

    def test_control_characters_between_elements(self, accessor, div):
        """Test a form feed tail does not abort the assignment."""
        accessor.set_inner_content(div, "<p>a</p>\x0c<p>b")

        assert [child.tag for child in div] == ["p", "p"]
        assert [child.text for child in div] == ["a", "b"]
        assert "\x0c" not in accessor.get_inner_content(div)

    def test_strict_only_leaves_empty(self, div):
        """Test malformed markup without a fallback yields an empty element."""
        accessor = InnerContentAccessor(AccessorConfig.strict_only())
        accessor.set_inner_content(div, "<p>Para 1<p>Para 2")

        assert accessor.get_inner_content(div) == ""


class TestSetInnerContentFailures:
    """Test failure paths."""

    def test_total_parse_failure(self, div):
        """Test markup rejected by both parsers leaves the element childless."""
        engine = LxmlDocumentEngine()
        engine.parse_document = Mock(return_value=None)
        accessor = InnerContentAccessor(engine=engine)

        accessor.set_inner_content(div, "<<<&&& unterminated")

        engine.parse_document.assert_called_once()
        assert len(div) == 0
        assert div.text is None
        assert accessor.get_inner_content(div) == ""

    def test_missing_wrapper(self, div):
        """Test a scratch document without the wrapper is a failed parse."""
        engine = LxmlDocumentEngine()
        engine.find_element = Mock(return_value=None)
        accessor = InnerContentAccessor(engine=engine)

        accessor.set_inner_content(div, "<p>unclosed")

        assert accessor.get_inner_content(div) == ""

    def test_empty_successful_parse_stops_chain(self, div):
        """Test a successful parse with no nodes does not fall through."""
        engine = LxmlDocumentEngine()
        first = _StubStrategy(engine, ParseOutcome(strategy="stub", success=True))
        second = _StubStrategy(engine, ParseOutcome(strategy="stub", success=True, nodes=["x"]))
        accessor = InnerContentAccessor(engine=engine, strategies=[first, second])

        accessor.set_inner_content(div, "anything")

        assert first.calls == 1
        assert second.calls == 0
        assert accessor.get_inner_content(div) == ""

    def test_unattachable_node_leaves_element_empty(self, div):
        """Test a node lxml refuses rolls back everything attached before it."""
        engine = LxmlDocumentEngine()
        nodes = [etree.Element("a"), "bad\x0ctext", etree.Element("b")]
        stub = _StubStrategy(engine, ParseOutcome(strategy="stub", success=True, nodes=nodes))
        accessor = InnerContentAccessor(engine=engine, strategies=[stub])

        accessor.set_inner_content(div, "anything")

        assert len(div) == 0
        assert div.text is None
        assert accessor.get_inner_content(div) == ""

    def test_raising_strategy_falls_through(self, div):
        """Test an unexpected strategy error moves on to the next strategy."""
        engine = LxmlDocumentEngine()
        broken = Mock(spec=ParseStrategy)
        broken.name = "broken"
        broken.parse.side_effect = RuntimeError("boom")
        fallback = _StubStrategy(engine, ParseOutcome(strategy="stub", success=True, nodes=["ok"]))
        accessor = InnerContentAccessor(engine=engine, strategies=[broken, fallback])

        accessor.set_inner_content(div, "anything")

        assert accessor.get_inner_content(div) == "ok"
        assert is_capturing() is False

    def test_capture_mode_restored(self, accessor, div):
        """Test the prior capture mode survives every path."""
        accessor.set_inner_content(div, "<p>unclosed")
        assert is_capturing() is False

        use_internal_errors(True)
        accessor.set_inner_content(div, "<p>unclosed")
        assert is_capturing() is True

    def test_clear_happens_before_parse(self, div):
        """Test the element is already empty when strategies run."""
        engine = LxmlDocumentEngine()
        seen = []

        class _Inspecting(ParseStrategy):
            name = "inspecting"

            def parse(self, element, markup):
                seen.append((len(element), element.text))
                return ParseOutcome(strategy=self.name, success=True)

        accessor = InnerContentAccessor(engine=engine, strategies=[_Inspecting(engine)])
        accessor.set_inner_content(div, "<b>x</b>")

        assert seen == [(0, None)]

    @pytest.mark.parametrize("node", [None, "text", etree.Comment("c")])
    def test_non_element_ignored(self, accessor, node):
        """Test assignment to non-elements is a no-op."""
        accessor.set_inner_content(node, "<b>x</b>")

    def test_suppressed_diagnostics_logged(self, div, caplog):
        """Test captured diagnostics can be logged before they are discarded."""
        accessor = InnerContentAccessor(AccessorConfig(log_suppressed_diagnostics=True))

        with caplog.at_level(logging.DEBUG, logger="inner_markup"):
            accessor.set_inner_content(div, "<p>unclosed")

        strict_records = [
            r for r in caplog.records
            if getattr(r, "diagnostic_component", None) == "strict_fragment"
        ]
        assert strict_records
        assert all(r.levelno == logging.DEBUG for r in strict_records)


class TestClear:
    """Test clearing on its own."""

    def test_clear(self, accessor, div):
        """Test clear removes all child nodes and reports the count."""
        assert accessor.clear(div) == 3
        assert accessor.get_inner_content(div) == ""

    def test_clear_non_element(self, accessor):
        """Test clearing a non-element does nothing."""
        assert accessor.clear(None) == 0


class TestModuleFunctions:
    """Test the default-accessor functions."""

    def test_get_and_set(self, div):
        """Test the shared accessor round trip."""
        set_inner_html(div, "<p>Para 1<p>Para 2")
        first = get_inner_html(div)

        set_inner_html(div, "<span>x</span>")

        assert "Para 2" in first
        assert get_inner_html(div) == "<span>x</span>"
