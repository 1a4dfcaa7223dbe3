"""Main CLI entry point for the inner-markup command-line tool.

Reads or replaces the inner markup of elements selected by XPath in an XML or
HTML document.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from lxml import etree

from inner_markup import __version__
from inner_markup.accessor import InnerContentAccessor, parse_html, parse_xml
from inner_markup.engine import is_element
from inner_markup.shared.config import AccessorConfig, ConfigError
from inner_markup.shared.logging import get_logger

PRESETS = {
    "compatible": AccessorConfig.compatible,
    "strict_only": AccessorConfig.strict_only,
    "html_output": AccessorConfig.html_output,
}


class CLIError(Exception):
    """User-facing CLI failure; the message is printed and the exit code is 1."""


def load_config(args: argparse.Namespace) -> AccessorConfig:
    """Build the accessor configuration from ``--config`` and ``--preset``."""
    if args.config:
        try:
            config = AccessorConfig.from_json(args.config.read_text(encoding="utf-8"))
        except OSError as e:
            raise CLIError(f"Could not read config file {args.config}: {e}") from e
        except ConfigError as e:
            raise CLIError(f"Invalid config file {args.config}: {e}") from e
    else:
        config = PRESETS[args.preset]()

    if args.html and not args.config and args.preset == "compatible":
        config = config.override(serialization_method="html")
    return config


def load_document(path: Path, html: bool) -> Any:
    """Load ``path`` as an HTML or XML document with ``innerHTML`` elements."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise CLIError(f"Could not read {path}: {e}") from e

    try:
        return parse_html(data) if html else parse_xml(data)
    except (etree.LxmlError, ValueError) as e:
        raise CLIError(f"Could not parse {path}: {e}") from e


def select_elements(document: Any, expression: str) -> List[Any]:
    """Evaluate an XPath expression and keep only element results."""
    try:
        result = document.xpath(expression)
    except etree.XPathError as e:
        raise CLIError(f"Invalid XPath expression {expression!r}: {e}") from e

    if not isinstance(result, list):
        raise CLIError(f"XPath expression {expression!r} does not select nodes")
    elements = [node for node in result if is_element(node)]
    if not elements:
        raise CLIError(f"No elements match {expression!r}")
    return elements


def cmd_get(args: argparse.Namespace) -> int:
    """Handle get command."""
    accessor = InnerContentAccessor(config=load_config(args))
    document = load_document(args.path, args.html)
    for element in select_elements(document, args.xpath):
        print(accessor.get_inner_content(element))
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Handle set command."""
    logger = get_logger(__name__, None, "cli")
    config = load_config(args)
    accessor = InnerContentAccessor(config=config)

    if args.markup_file:
        try:
            markup = args.markup_file.read_text(encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Could not read {args.markup_file}: {e}") from e
    else:
        markup = args.markup

    document = load_document(args.path, args.html)
    elements = select_elements(document, args.xpath)
    for element in elements:
        accessor.set_inner_content(element, markup)
    logger.info("Replaced inner markup", extra={"element_count": len(elements)})

    output = etree.tostring(
        document,
        encoding="unicode",
        method="html" if args.html else "xml",
    )
    if args.output:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Error writing output: {e}") from e
        print(f"Document written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", type=Path, help="XML or HTML document")
    parser.add_argument(
        "--xpath", "-x",
        required=True,
        help="XPath expression selecting the target elements"
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Treat the document as HTML (lenient parse, HTML serialization)"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Accessor configuration file (JSON)"
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="compatible",
        help="Accessor configuration preset (default: compatible)"
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="inner-markup",
        description="Read and replace the inner markup of XML/HTML elements"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    get_parser = subparsers.add_parser("get", help="Print the inner markup of elements")
    _add_common_arguments(get_parser)

    set_parser = subparsers.add_parser("set", help="Replace the inner markup of elements")
    _add_common_arguments(set_parser)
    source = set_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--markup", "-m", help="New inner markup")
    source.add_argument(
        "--markup-file",
        type=Path,
        help="File containing the new inner markup"
    )
    set_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "get":
            return cmd_get(args)
        if args.command == "set":
            return cmd_set(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
