"""
Document skeleton assembler.

Turns an arbitrary NodeList into a complete document:

    [<!doctype html>, "\\n", <html>[<head>, "\\n", <body>]]

Existing doctype/html/head/body elements are reused and moved into place;
missing ones are synthesized. Author content is moved, never copied.
"""

from __future__ import annotations

import logging

from .config import get_config
from .dom import (
    APPEND,
    DOCTYPE,
    ELEMENT,
    PREPEND,
    Node,
    adopt,
    create_doctype,
    create_element,
    create_fragment,
    find,
    find_all,
    find_parent,
    insert,
    is_element_named,
    is_whitespace,
    remove,
    trim_edge_whitespace,
)

logger = logging.getLogger(__name__)

# Tags an author may write before body content without wrapping them in <head>
HEAD_ELEMENTS = frozenset({"link", "title", "meta", "style"})


def is_head_element(node: Node) -> bool:
    return node.type == ELEMENT and node.name in HEAD_ELEMENTS


def assemble_document(nodes: list[Node], lang: str | None = None) -> list[Node]:
    """
    Build a complete document from `nodes`.

    The nodes are moved into the returned list; the input list is emptied
    of everything that was reused.
    """
    cfg = get_config().document
    source = create_fragment(nodes)
    document = create_fragment()

    doctype = find(source, lambda node: node.type == DOCTYPE)
    if doctype is not None:
        remove(doctype, find_parent(source, doctype))
    else:
        doctype = create_doctype(cfg.doctype)
        logger.debug("Synthesized <!doctype %s>", cfg.doctype)

    html = _resolve_html(source, lang or cfg.lang)
    insert(html, document)
    head = _resolve_head(html)
    _resolve_body(html, head)

    # Only the first doctype counts
    for extra in find_all(document, lambda node: node.type == DOCTYPE):
        remove(extra, find_parent(document, extra))

    insert(doctype, document, PREPEND)
    trim_edge_whitespace(document)
    return document.children


def _resolve_html(source: Node, lang: str) -> Node:
    html = next((child for child in source.children if is_element_named(child, "html")), None)

    if html is None:
        html = create_element("html", {"lang": lang})
        while source.children:
            adopt(source.children[0], source, html)
        logger.debug("Synthesized <html lang=%r>", lang)
    else:
        index = next(i for i, child in enumerate(source.children) if child is html)
        leading = source.children[:index]
        trailing = source.children[index + 1:]
        remove(html, source)
        for node in reversed(leading):
            _move_or_drop(node, source, html, PREPEND)
        for node in trailing:
            _move_or_drop(node, source, html, APPEND)

    for extra in find_all(html, lambda node: node is not html and is_element_named(node, "html")):
        _unwrap_in_place(extra, html)
    return html


def _resolve_head(html: Node) -> Node:
    head = find(html, lambda node: is_element_named(node, "head"))

    if head is not None:
        adopt(head, find_parent(html, head), html, PREPEND)
    else:
        head = create_element("head")
        adopted = 0
        while html.children:
            child = html.children[0]
            # Whitespace is useless in <head>
            if is_whitespace(child):
                remove(child, html)
                continue
            if not is_head_element(child):
                break
            adopt(child, html, head)
            adopted += 1
        insert(head, html, PREPEND)
        logger.debug("Synthesized <head> with %d adopted element(s)", adopted)

    for extra in find_all(html, lambda node: node is not head and is_element_named(node, "head")):
        _merge_into(extra, html, head)
    return head


def _resolve_body(html: Node, head: Node) -> Node:
    body = find(html, lambda node: node is not head and is_element_named(node, "body"))

    if body is not None:
        parent = find_parent(html, body)
        if parent is not html:
            adopt(body, parent, html)
        strays = [child for child in html.children if child is not head and child is not body]
        index = next(i for i, child in enumerate(html.children) if child is body)
        before = [node for node in strays if _position(html, node) < index]
        after = [node for node in strays if _position(html, node) > index]
        for node in reversed(before):
            _move_or_drop(node, html, body, PREPEND)
        for node in after:
            _move_or_drop(node, html, body, APPEND)
        adopt(body, html, html, APPEND)
    else:
        body = create_element("body")
        rest = [child for child in html.children if child is not head]
        for node in rest:
            remove(node, html)
        carrier = create_fragment(rest)
        trim_edge_whitespace(carrier)
        while carrier.children:
            adopt(carrier.children[0], carrier, body)
        insert(body, html, APPEND)
        logger.debug("Synthesized <body>")

    for extra in find_all(html, lambda node: node is not body and is_element_named(node, "body")):
        _unwrap_in_place(extra, html)
    return body


def _position(parent: Node, node: Node) -> int:
    return next(i for i, child in enumerate(parent.children) if child is node)


def _move_or_drop(node: Node, from_parent: Node, to_parent: Node, position: str) -> None:
    """Move author content; discard whitespace-only formatting text."""
    if is_whitespace(node):
        remove(node, from_parent)
    else:
        adopt(node, from_parent, to_parent, position)


def _merge_into(extra: Node, root: Node, target: Node) -> None:
    """Replace a duplicate <head> by moving its children into the canonical one."""
    parent = find_parent(root, extra)
    if parent is None:
        return
    remove(extra, parent)
    while extra.children:
        _move_or_drop(extra.children[0], extra, target, APPEND)
    logger.debug("Merged duplicate <%s> into the canonical element", extra.name)


def _unwrap_in_place(extra: Node, root: Node) -> None:
    """Replace a duplicate skeleton element by its children, at its own position."""
    parent = find_parent(root, extra)
    if parent is None:
        return
    index = _position(parent, extra)
    parent.children[index:index + 1] = extra.children
    extra.children = []
    logger.debug("Unwrapped duplicate <%s> in place", extra.name)
