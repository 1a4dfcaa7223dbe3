#!/usr/bin/env python3
"""
Quick Start Guide for Inner Markup.

Walks through reading and replacing inner markup on lxml trees, from the
simple functions up to a configured accessor.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lxml import etree

from inner_markup import (
    AccessorConfig,
    InnerContentAccessor,
    get_inner_html,
    parse_html,
    set_inner_html,
)


def property_example():
    """Elements loaded through parse_html() expose innerHTML."""
    print("📄 Step 1: innerHTML property")
    print("-" * 30)

    doc = parse_html("<div><p>Para 1</p><p>Para 2</p></div>")
    div = doc.find(".//div")
    print(f"{div} innerHTML: {div.innerHTML}")

    div.innerHTML = '<a href="http://fivefilters.org">FiveFilters.org</a>'
    print(f"{div} innerHTML: {div.innerHTML}")

    div.innerHTML = "<p>Unclosed 1<p>Unclosed 2"
    print(f"{div} after ill-formed markup: {div.innerHTML}")


def function_example():
    """Any lxml element works with the module-level functions."""
    print("\n🔧 Step 2: Plain lxml elements")
    print("-" * 30)

    root = etree.fromstring("<book><title>Old</title></book>")
    title = root[0]
    set_inner_html(title, "New <em>and improved</em>")
    print(f"title inner markup: {get_inner_html(title)}")
    print(f"document: {etree.tostring(root, encoding='unicode')}")


def configured_example():
    """A configured accessor: strict parsing only, HTML serialization."""
    print("\n⚙️  Step 3: Configured accessor")
    print("-" * 30)

    config = AccessorConfig.strict_only().override(serialization_method="html")
    accessor = InnerContentAccessor(config=config, correlation_id="quick-start")

    root = etree.fromstring("<root><div/></root>")
    div = root[0]

    accessor.set_inner_content(div, "line 1<br/>line 2")
    print(f"well-formed: {accessor.get_inner_content(div)}")

    accessor.set_inner_content(div, "<p>not closed")
    print(f"ill-formed without fallback: {accessor.get_inner_content(div)!r}")


def main():
    """Main function."""
    property_example()
    function_example()
    configured_example()
    print("\n✅ All examples completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
