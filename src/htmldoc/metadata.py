"""
Metadata injection for assembled documents.

Adds the standard application <head> catalogue (title, charset, viewport,
theme colours, Open Graph tags, stylesheet links) and <script> elements to
a document produced by `assemble_document`. Every insertion is skipped when
the author already wrote an equivalent element, so injection is idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .config import get_config
from .dom import (
    APPEND,
    PREPEND,
    Node,
    Position,
    StructuralIntegrityError,
    create_element,
    create_text,
    find_element,
    find_elements,
    insert,
    is_element_named,
)

logger = logging.getLogger(__name__)

# A <meta> is identified by exactly one of these
META_DISCRIMINATORS = ("name", "property", "charset")


@dataclass
class Stylesheet:
    url: str


@dataclass
class Script:
    url: str
    is_es_module: bool = False


@dataclass
class DocumentOptions:
    """Application metadata used to populate the document."""
    title: str | None = None
    description: str | None = None
    image: str | None = None
    url: str | None = None
    manifest_url: str | None = None
    icon_url: str | None = None
    stylesheets: list[Stylesheet] = field(default_factory=list)
    scripts: list[Script] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DocumentOptions:
        """
        Build options from a plain mapping, e.g. a decoded JSON options file.

        Accepts the camelCase wire names (manifestUrl, iconUrl, isEsModule)
        as well as the snake_case attribute names. Stylesheet and script
        entries may be bare URL strings.
        """
        def pick(*keys: str) -> Any:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return None

        stylesheets = [
            Stylesheet(url=entry) if isinstance(entry, str) else Stylesheet(url=entry["url"])
            for entry in data.get("stylesheets") or []
        ]
        scripts = []
        for entry in data.get("scripts") or []:
            if isinstance(entry, str):
                scripts.append(Script(url=entry))
            else:
                is_module = entry.get("isEsModule", entry.get("is_es_module", False))
                scripts.append(Script(url=entry["url"], is_es_module=bool(is_module)))

        return cls(
            title=pick("title"),
            description=pick("description"),
            image=pick("image"),
            url=pick("url"),
            manifest_url=pick("manifestUrl", "manifest_url"),
            icon_url=pick("iconUrl", "icon_url"),
            stylesheets=stylesheets,
            scripts=scripts,
        )


def _meta_discriminator(attributes: Mapping[str, str]) -> str | None:
    keys = [key for key in META_DISCRIMINATORS if key in attributes]
    if len(keys) != 1:
        return None
    return keys[0]


def _meta_matches(existing: Node, attributes: Mapping[str, str], key: str) -> bool:
    if not is_element_named(existing, "meta") or key not in existing.attributes:
        return False
    # Any charset declaration wins; a document only gets one
    if key == "charset":
        return True
    if existing.attributes[key] != attributes[key]:
        return False
    media, existing_media = attributes.get("media"), existing.attributes.get("media")
    return media is None or existing_media is None or media == existing_media


def set_meta(head: Node, attributes: dict[str, str], position: Position = APPEND) -> Node | None:
    """
    Insert <meta> unless head already has one with the same name, property
    or charset. The author's element wins. Returns the new element, or None
    when skipped.
    """
    key = _meta_discriminator(attributes)
    if key is not None:
        if any(_meta_matches(child, attributes, key) for child in head.children):
            logger.debug("Keeping existing <meta %s=%r>", key, attributes[key])
            return None
    return insert(create_element("meta", attributes), head, position)


def add_link(head: Node, attributes: dict[str, str], position: Position = APPEND) -> Node | None:
    """Insert <link> unless head already has one with the same rel and href."""
    for child in head.children:
        if (
            is_element_named(child, "link")
            and child.attributes.get("rel") == attributes.get("rel")
            and child.attributes.get("href") == attributes.get("href")
        ):
            logger.debug("Keeping existing <link rel=%r href=%r>", attributes.get("rel"), attributes.get("href"))
            return None
    return insert(create_element("link", attributes), head, position)


def set_title(head: Node, title: str) -> Node:
    """Prepend <title> unless head already has one; returns the title in effect."""
    existing = find_element(head, "title")
    if existing is not None:
        return existing
    return insert(create_element("title", children=[create_text(title)]), head, PREPEND)


def add_script(body: Node, script: Script) -> Node | None:
    """Append <script src> to body unless one with the same src exists."""
    if any(node.attributes.get("src") == script.url for node in find_elements(body, "script")):
        logger.debug("Keeping existing <script src=%r>", script.url)
        return None
    attributes = {"src": script.url}
    if script.is_es_module:
        attributes["type"] = "module"
    return insert(create_element("script", attributes), body)


def _skeleton_part(document: list[Node], name: str) -> Node:
    html = next((node for node in document if is_element_named(node, "html")), None)
    part = None
    if html is not None:
        part = next((node for node in html.children if is_element_named(node, name)), None)
    if part is None:
        raise StructuralIntegrityError(f"Document has no <{name}>; assemble it before injecting metadata")
    return part


def inject_metadata(document: list[Node], options: DocumentOptions | None = None) -> list[Node]:
    """
    Populate the <head> and <body> of an assembled document in place.
    Returns the same list for chaining.
    """
    options = options or DocumentOptions()
    cfg = get_config()
    head = _skeleton_part(document, "head")
    body = _skeleton_part(document, "body")

    if options.title:
        set_title(head, options.title)

    # Webfont host preconnects
    for host in cfg.fonts.preconnect:
        add_link(head, {"rel": "preconnect", "href": host})

    # Application stylesheets
    for stylesheet in options.stylesheets:
        add_link(head, {"rel": "stylesheet", "href": stylesheet.url})

    # Webfont CSS
    add_link(head, {"rel": "stylesheet", "href": cfg.fonts.stylesheet})

    if options.description:
        set_meta(head, {"name": "description", "content": options.description})

    # App icons
    if options.icon_url:
        add_link(head, {"rel": "apple-touch-icon", "href": options.icon_url})
        add_link(head, {"rel": "shortcut icon", "href": options.icon_url})

    # Theme
    set_meta(head, {"name": "theme-color", "content": cfg.theme.light, "media": "(prefers-color-scheme: light)"})
    set_meta(head, {"name": "theme-color", "content": cfg.theme.dark, "media": "(prefers-color-scheme: dark)"})

    # Apple mobile specifics
    set_meta(head, {"name": "apple-mobile-web-app-capable", "content": "yes"})

    # Open Graph
    if options.title:
        set_meta(head, {"name": "apple-mobile-web-app-title", "content": options.title})
        set_meta(head, {"property": "og:title", "content": options.title})
        set_meta(head, {"property": "og:site_name", "content": options.title})
    if options.description:
        set_meta(head, {"property": "og:description", "content": options.description})
    if options.image:
        set_meta(head, {"property": "og:image", "content": options.image})
    if options.url:
        set_meta(head, {"property": "og:url", "content": options.url})
        add_link(head, {"rel": "canonical", "href": options.url})
    set_meta(head, {"property": "og:type", "content": "website"})

    # App manifest.json
    if options.manifest_url:
        add_link(head, {"rel": "manifest", "href": options.manifest_url})

    # Prepended last so they end up at the top of <head>
    set_meta(head, {"name": "viewport", "content": cfg.document.viewport}, PREPEND)
    set_meta(head, {"charset": cfg.document.charset}, PREPEND)

    for script in options.scripts:
        add_script(body, script)

    return document
