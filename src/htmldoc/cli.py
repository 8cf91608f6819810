"""
CLI interface for htmldoc.

Pipe-friendly: reads markup from a file or stdin, writes a complete HTML
document (or, with --fragment, a fragment module) to stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import get_config
from .core import generate_index_document, transform_fragment
from .dom import StructuralIntegrityError
from .exports import ValidationError
from .formats import html as _html  # noqa: F401 - ensure html format is registered
from .formats.base import MarkupFormat, registry
from .metadata import DocumentOptions, Script, Stylesheet

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="htmldoc",
        description="Assemble complete HTML documents from partial markup",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--fragment",
        "-f",
        action="store_true",
        help="Treat input as an embeddable fragment: minify and export elements by id",
    )

    parser.add_argument(
        "--emit",
        choices=["html", "module", "types"],
        default=None,
        help="Fragment output: minified markup, ES module (default) or type definitions",
    )

    parser.add_argument(
        "--options",
        "-o",
        type=str,
        help="JSON file with document options (title, description, scripts, ...)",
    )

    parser.add_argument("--title", type=str, help="Document title")
    parser.add_argument("--description", type=str, help="Meta description")
    parser.add_argument("--image", type=str, help="Open Graph image URL")
    parser.add_argument("--url", type=str, help="Canonical URL")
    parser.add_argument("--manifest-url", type=str, help="Web app manifest URL")
    parser.add_argument("--icon-url", type=str, help="App icon URL")

    parser.add_argument(
        "--stylesheet",
        action="append",
        default=[],
        metavar="URL",
        help="Add a stylesheet link (repeatable)",
    )

    parser.add_argument(
        "--script",
        action="append",
        default=[],
        metavar="URL",
        help="Add a classic script (repeatable)",
    )

    parser.add_argument(
        "--module-script",
        action="append",
        default=[],
        metavar="URL",
        help="Add an ES module script (repeatable)",
    )

    parser.add_argument(
        "--minify",
        "-m",
        action="store_true",
        help="Minify the input markup before assembling the document",
    )

    parser.add_argument(
        "--type",
        type=str,
        dest="format_type",
        help="Force markup format (e.g., html)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log skeleton and metadata decisions to stderr",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> tuple[str, str | None]:
    """Read from file or stdin, return (content, filename)."""
    if filepath:
        with open(filepath, encoding="utf-8") as f:
            return f.read(), filepath
    return sys.stdin.read(), None


def get_format(content: str, filename: str | None, force_type: str | None) -> MarkupFormat:
    """Get markup format via override, detection, or fallback to html."""
    if force_type:
        fmt = registry.get_by_name(force_type) or registry.get_by_extension(force_type)
        if fmt:
            return fmt
        raise ValueError(f"Unknown markup format: {force_type}")

    detected = registry.detect(content, filename)
    if detected:
        return detected

    fallback = registry.get_by_name("html")
    if fallback:
        return fallback

    raise RuntimeError("No markup format available")


def build_options(parsed: argparse.Namespace) -> DocumentOptions:
    """Options file first, then CLI flags on top."""
    options = DocumentOptions()
    if parsed.options:
        with open(parsed.options, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Options file must contain a JSON object: {parsed.options}")
        options = DocumentOptions.from_mapping(data)

    for attr in ("title", "description", "image", "url", "manifest_url", "icon_url"):
        value = getattr(parsed, attr)
        if value is not None:
            setattr(options, attr, value)

    options.stylesheets += [Stylesheet(url=url) for url in parsed.stylesheet]
    options.scripts += [Script(url=url) for url in parsed.script]
    options.scripts += [Script(url=url, is_es_module=True) for url in parsed.module_script]
    return options


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    get_config()

    try:
        content, filename = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        fmt = get_format(content, filename, parsed.format_type)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.fragment:
        try:
            result = transform_fragment(content, format_name=fmt.name)
        except ValidationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        emit = parsed.emit or "module"
        if emit == "html":
            output = result.code
        elif emit == "types":
            output = result.type_definitions
        else:
            output = result.module
        print(output)
        return 0

    if parsed.emit and parsed.emit != "html":
        print("Error: --emit module/types requires --fragment", file=sys.stderr)
        return 1

    try:
        options = build_options(parsed)
    except (OSError, ValueError, KeyError, TypeError) as e:
        print(f"Error: Invalid options: {e}", file=sys.stderr)
        return 1

    try:
        output = generate_index_document(
            content,
            options,
            minify_input=parsed.minify,
            format_name=fmt.name,
        )
    except StructuralIntegrityError as e:
        logger.error("Document assembly failed: %s", e)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
