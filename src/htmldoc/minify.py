"""
Minifier for markup fragments.

Produces a new tree with comments dropped and inter-element whitespace
collapsed. Subtrees of whitespace-sensitive elements are copied untouched.
"""

from __future__ import annotations

import copy
import re

from .dom import COMMENT, ELEMENT, TEXT, Node, create_fragment, create_text, trim_edge_whitespace

WHITESPACE_SENSITIVE = frozenset({"pre", "textarea", "script", "style"})

_WHITESPACE_RUN = re.compile(r"\s+")


def collapse_whitespace(value: str) -> str:
    """
    Collapse whitespace runs to one space and trim.
    A non-empty value that trims to nothing keeps a single space, which
    is what separates adjacent inline elements.
    """
    collapsed = _WHITESPACE_RUN.sub(" ", value).strip()
    if collapsed == "" and value:
        return " "
    return collapsed


def minify(nodes: list[Node]) -> list[Node]:
    """Return a minified copy of `nodes`. The input is left untouched."""
    root = create_fragment(_minify_children(nodes))
    trim_edge_whitespace(root)
    return root.children


def _minify_children(children: list[Node]) -> list[Node]:
    result: list[Node] = []
    pending_text: list[str] = []

    def flush() -> None:
        if pending_text:
            value = "".join(pending_text)
            pending_text.clear()
            if value:
                result.append(create_text(collapse_whitespace(value)))

    for child in children:
        if child.type == COMMENT:
            continue
        if child.type == TEXT:
            # Dropped comments can leave text siblings adjacent; merge them
            pending_text.append(child.value or "")
            continue
        flush()
        result.append(_minify_node(child))
    flush()
    return result


def _minify_node(node: Node) -> Node:
    if node.type != ELEMENT:
        return copy.deepcopy(node)
    if node.name in WHITESPACE_SENSITIVE:
        return copy.deepcopy(node)
    return Node(
        type=ELEMENT,
        name=node.name,
        attributes=dict(node.attributes),
        children=_minify_children(node.children),
    )
