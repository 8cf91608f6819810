"""
Pipelines for htmldoc.

Implements:
- Full documents: tokenize -> (minify) -> assemble skeleton -> inject metadata -> serialize
- Embeddable fragments: tokenize -> minify -> collect id exports -> generate module text
"""

from __future__ import annotations

from dataclasses import dataclass

from .dom import Node
from .exports import collect_exports, render_module, render_type_definitions
from .formats import html as _html  # noqa: F401 - ensure html format is registered
from .formats.base import MarkupFormat, registry
from .metadata import DocumentOptions, inject_metadata
from .minify import minify
from .skeleton import assemble_document


@dataclass
class TransformResult:
    """A fragment turned into a JavaScript module."""
    code: str  # minified markup
    module: str  # ES module source
    type_definitions: str  # matching .d.ts source


def get_format(format_name: str) -> MarkupFormat:
    fmt = registry.get_by_name(format_name)
    if fmt is None:
        raise ValueError(f"Unknown markup format: {format_name}")
    return fmt


def build_document(
    nodes: list[Node],
    options: DocumentOptions | None = None,
    lang: str | None = None,
) -> list[Node]:
    """Assemble a complete document from `nodes` and populate its metadata."""
    document = assemble_document(nodes, lang=lang)
    return inject_metadata(document, options)


def generate_index_document(
    code: str,
    options: DocumentOptions | None = None,
    minify_input: bool = False,
    format_name: str = "html",
) -> str:
    """Turn markup (a full page or any partial of one) into a complete document."""
    fmt = get_format(format_name)
    nodes = fmt.parse(code)
    if minify_input:
        nodes = minify(nodes)
    return fmt.serialize(build_document(nodes, options))


def transform_fragment(code: str, format_name: str = "html") -> TransformResult:
    """
    Turn a markup fragment into a module exporting its elements by id.

    Raises ValidationError if an id cannot be used as an export name.
    """
    fmt = get_format(format_name)
    fragment = minify(fmt.parse(code))
    exports = collect_exports(fragment)
    html_text = fmt.serialize(fragment)
    return TransformResult(
        code=html_text,
        module=render_module(exports, html_text),
        type_definitions=render_type_definitions(exports),
    )
