"""
HTML format.

Tokenizes markup with the standard library HTMLParser into the htmldoc node
model, and serializes node trees back to markup. No tree-construction
repair is attempted beyond closing open elements: <head>/<body> inference
is the skeleton assembler's job, not the tokenizer's.
"""

from __future__ import annotations

from html import escape
from html.parser import HTMLParser

from ..dom import (
    COMMENT,
    DOCTYPE,
    ELEMENT,
    FRAGMENT,
    TEXT,
    Node,
    create_comment,
    create_doctype,
    create_element,
    create_text,
)
from .base import MarkupFormat, registry

# HTML5 void elements (no closing tag)
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Text inside these is emitted without escaping
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


class TreeBuilder(HTMLParser):
    """Builds a NodeList from parser events."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root: list[Node] = []
        self.stack: list[Node] = []

    @property
    def _children(self) -> list[Node]:
        return self.stack[-1].children if self.stack else self.root

    def _element(self, tag: str, attrs: list[tuple[str, str | None]]) -> Node:
        attributes: dict[str, str] = {}
        for name, value in attrs:
            # First occurrence of a duplicated attribute wins
            attributes.setdefault(name, value or "")
        node = create_element(tag, attributes)
        self._children.append(node)
        return node

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        node = self._element(tag, attrs)
        if tag not in VOID_ELEMENTS:
            self.stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._element(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        for index in range(len(self.stack) - 1, -1, -1):
            if self.stack[index].name == tag:
                del self.stack[index:]
                return
        # unmatched closing tags are ignored

    def handle_data(self, data: str) -> None:
        children = self._children
        if children and children[-1].type == TEXT:
            children[-1].value += data
        else:
            children.append(create_text(data))

    def handle_comment(self, data: str) -> None:
        self._children.append(create_comment(data))

    def handle_decl(self, decl: str) -> None:
        keyword, _, rest = decl.partition(" ")
        if keyword.lower() == "doctype":
            self._children.append(create_doctype(rest.strip() or "html"))


def parse_html(content: str) -> list[Node]:
    builder = TreeBuilder()
    builder.feed(content)
    builder.close()
    return builder.root


def _escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


def _render_attributes(attributes: dict[str, str]) -> str:
    parts = []
    for key, value in attributes.items():
        if value == "":
            parts.append(key)
        else:
            parts.append(f'{key}="{_escape_attribute(value)}"')
    return "".join(" " + part for part in parts)


def _render(node: Node, out: list[str], raw_text: bool = False) -> None:
    if node.type == TEXT:
        value = node.value or ""
        out.append(value if raw_text else escape(value, quote=False))
    elif node.type == COMMENT:
        out.append(f"<!--{node.value or ''}-->")
    elif node.type == DOCTYPE:
        out.append(f"<!doctype {node.name}>")
    elif node.type == FRAGMENT:
        for child in node.children:
            _render(child, out, raw_text)
    elif node.type == ELEMENT:
        out.append(f"<{node.name}{_render_attributes(node.attributes)}>")
        if node.name in VOID_ELEMENTS:
            return
        for child in node.children:
            _render(child, out, node.name in RAW_TEXT_ELEMENTS)
        out.append(f"</{node.name}>")


def serialize_html(nodes: list[Node]) -> str:
    out: list[str] = []
    for node in nodes:
        _render(node, out)
    return "".join(out)


class HtmlFormat(MarkupFormat):
    """HTML documents and fragments."""

    @property
    def name(self) -> str:
        return "html"

    @property
    def extensions(self) -> list[str]:
        return [".html", ".htm", ".xhtml"]

    def detect(self, content: str) -> bool:
        head = content.lstrip()[:15].lower()
        return head.startswith("<!doctype html") or head.startswith("<html")

    def parse(self, content: str) -> list[Node]:
        return parse_html(content)

    def serialize(self, nodes: list[Node]) -> str:
        return serialize_html(nodes)


registry.register(HtmlFormat())
