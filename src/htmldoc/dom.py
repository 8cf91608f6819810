"""
DOM - Document Object Model for htmldoc

Every markup tree is a tree of Nodes. A Node is a tagged union: the `type`
field says which of the fields below are meaningful.

    doctype  -> name
    text     -> value
    comment  -> value
    element  -> name, attributes, children
    fragment -> children (a NodeList root: siblings with no element parent)

Key invariant: a node is never the child of two parents. Trees are only
mutated through insert/remove/adopt, and every move is remove-then-insert.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Literal

DOCTYPE = "doctype"
TEXT = "text"
COMMENT = "comment"
ELEMENT = "element"
FRAGMENT = "fragment"

PREPEND = "prepend"
APPEND = "append"

Position = Literal["prepend", "append"]
NodePredicate = Callable[["Node"], bool]


class StructuralIntegrityError(ValueError):
    """A tree operation was given a node that is not where the caller said it was."""


@dataclass
class Node:
    """A node in the markup tree."""
    type: str
    name: str | None = None
    value: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    @property
    def is_element(self) -> bool:
        return self.type == ELEMENT

    @property
    def is_text(self) -> bool:
        return self.type == TEXT

    def depth_first(self) -> Iterator[Node]:
        """Traverse tree depth-first (document order), yielding self then children."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def breadth_first(self) -> Iterator[Node]:
        """Traverse tree breadth-first."""
        queue: list[Node] = [self]
        while queue:
            node = queue.pop(0)
            yield node
            queue.extend(node.children)


def create_element(
    name: str,
    attributes: dict[str, str] | None = None,
    children: list[Node] | None = None,
) -> Node:
    return Node(type=ELEMENT, name=name, attributes=dict(attributes or {}), children=children or [])


def create_text(value: str) -> Node:
    return Node(type=TEXT, value=value)


def create_comment(value: str) -> Node:
    return Node(type=COMMENT, value=value)


def create_doctype(name: str = "html") -> Node:
    return Node(type=DOCTYPE, name=name)


def create_fragment(children: list[Node] | None = None) -> Node:
    """
    Wrap a NodeList in a fragment node.

    The list object is shared, not copied, so mutations made through the
    fragment are visible to whoever holds the list.
    """
    return Node(type=FRAGMENT, children=children if children is not None else [])


def is_whitespace(node: Node) -> bool:
    """True for a text node containing only whitespace characters."""
    return node.type == TEXT and (node.value or "").strip() == ""


def is_element_named(node: Node, name: str) -> bool:
    return node.type == ELEMENT and node.name == name


def describe(node: Node) -> str:
    """Short human-readable label for error messages."""
    if node.type == ELEMENT:
        return f"<{node.name}>"
    if node.type == DOCTYPE:
        return f"<!doctype {node.name}>"
    if node.type in (TEXT, COMMENT):
        return f"{node.type} {(node.value or '')[:30]!r}"
    return node.type


def _as_root(root: Node | list[Node]) -> Node:
    if isinstance(root, list):
        return create_fragment(root)
    return root


def find(root: Node | list[Node], predicate: NodePredicate) -> Node | None:
    """
    Return the first node, breadth-first, that passes `predicate`.
    The starting node is included in the search.
    """
    for node in _as_root(root).breadth_first():
        if predicate(node):
            return node
    return None


def find_all(root: Node | list[Node], predicate: NodePredicate) -> list[Node]:
    """Return every node, breadth-first, that passes `predicate`."""
    return [node for node in _as_root(root).breadth_first() if predicate(node)]


def find_element(root: Node | list[Node], name: str) -> Node | None:
    """Find the first element with the given tag name."""
    return find(root, lambda node: is_element_named(node, name))


def find_elements(root: Node | list[Node], name: str) -> list[Node]:
    """Find every element with the given tag name."""
    return find_all(root, lambda node: is_element_named(node, name))


def find_parent(root: Node | list[Node], target: Node) -> Node | None:
    """Find the direct parent of `target` (by identity) inside `root`."""
    for node in _as_root(root).breadth_first():
        if any(child is target for child in node.children):
            return node
    return None


def _index_of(node: Node, parent: Node) -> int:
    for index, child in enumerate(parent.children):
        if child is node:
            return index
    return -1


def _is_markup(node: Node) -> bool:
    return node.type in (ELEMENT, DOCTYPE)


def insert(node: Node, parent: Node, position: Position = APPEND) -> Node:
    """
    Insert `node` at the start or end of `parent.children`.

    Elements and doctypes placed next to another element or doctype get a
    single "\\n" text node between them. Text and comments are inserted as-is.
    """
    if position not in (PREPEND, APPEND):
        raise ValueError(f"Unknown insert position: {position!r}")
    if node is parent or _index_of(node, parent) != -1:
        raise StructuralIntegrityError(f"{describe(node)} is already a child of {describe(parent)}")

    children = parent.children
    separate = _is_markup(node)
    if position == PREPEND:
        if separate and children and _is_markup(children[0]):
            children.insert(0, create_text("\n"))
        children.insert(0, node)
    else:
        if separate and children and _is_markup(children[-1]):
            children.append(create_text("\n"))
        children.append(node)
    return node


def remove(node: Node, parent: Node) -> Node:
    """Detach `node` from `parent`. It must be a direct child."""
    index = _index_of(node, parent)
    if index == -1:
        raise StructuralIntegrityError(f"{describe(node)} is not a child of {describe(parent)}")
    del parent.children[index]
    return node


def adopt(node: Node, from_parent: Node, to_parent: Node, position: Position = APPEND) -> Node:
    """Move `node` between parents (or to the other end of the same parent)."""
    remove(node, from_parent)
    return insert(node, to_parent, position)


def trim_edge_whitespace(container: Node) -> None:
    """Remove the first and last child if they are whitespace-only text."""
    if container.children and is_whitespace(container.children[0]):
        remove(container.children[0], container)
    if container.children and is_whitespace(container.children[-1]):
        remove(container.children[-1], container)
