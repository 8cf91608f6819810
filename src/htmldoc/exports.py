"""
Element identifier exports.

Fragments expose every element carrying an `id` as a named export of a
generated JavaScript module. Ids therefore have to be usable as export
names: non-empty, no hyphens, and unique within the fragment.
"""

from __future__ import annotations

import json
import logging

from .dom import ELEMENT, Node, create_fragment

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Input markup carries an id that cannot be exported."""


# Tag name -> DOM interface, for the generated type definitions
TAG_INTERFACES: dict[str, str] = {
    "a": "HTMLAnchorElement",
    "abbr": "HTMLElement",
    "address": "HTMLElement",
    "area": "HTMLAreaElement",
    "article": "HTMLElement",
    "aside": "HTMLElement",
    "audio": "HTMLAudioElement",
    "b": "HTMLElement",
    "base": "HTMLBaseElement",
    "bdi": "HTMLElement",
    "bdo": "HTMLElement",
    "blockquote": "HTMLQuoteElement",
    "body": "HTMLBodyElement",
    "br": "HTMLBRElement",
    "button": "HTMLButtonElement",
    "canvas": "HTMLCanvasElement",
    "caption": "HTMLTableCaptionElement",
    "cite": "HTMLElement",
    "code": "HTMLElement",
    "col": "HTMLTableColElement",
    "colgroup": "HTMLTableColElement",
    "data": "HTMLDataElement",
    "datalist": "HTMLDataListElement",
    "dd": "HTMLElement",
    "del": "HTMLModElement",
    "details": "HTMLDetailsElement",
    "dfn": "HTMLElement",
    "dialog": "HTMLDialogElement",
    "div": "HTMLDivElement",
    "dl": "HTMLDListElement",
    "dt": "HTMLElement",
    "em": "HTMLElement",
    "embed": "HTMLEmbedElement",
    "fieldset": "HTMLFieldSetElement",
    "figcaption": "HTMLElement",
    "figure": "HTMLElement",
    "footer": "HTMLElement",
    "form": "HTMLFormElement",
    "h1": "HTMLHeadingElement",
    "h2": "HTMLHeadingElement",
    "h3": "HTMLHeadingElement",
    "h4": "HTMLHeadingElement",
    "h5": "HTMLHeadingElement",
    "h6": "HTMLHeadingElement",
    "head": "HTMLHeadElement",
    "header": "HTMLElement",
    "hgroup": "HTMLElement",
    "hr": "HTMLHRElement",
    "html": "HTMLHtmlElement",
    "i": "HTMLElement",
    "iframe": "HTMLIFrameElement",
    "img": "HTMLImageElement",
    "input": "HTMLInputElement",
    "ins": "HTMLModElement",
    "kbd": "HTMLElement",
    "label": "HTMLLabelElement",
    "legend": "HTMLLegendElement",
    "li": "HTMLLIElement",
    "link": "HTMLLinkElement",
    "main": "HTMLElement",
    "map": "HTMLMapElement",
    "mark": "HTMLElement",
    "menu": "HTMLMenuElement",
    "meta": "HTMLMetaElement",
    "meter": "HTMLMeterElement",
    "nav": "HTMLElement",
    "noscript": "HTMLElement",
    "object": "HTMLObjectElement",
    "ol": "HTMLOListElement",
    "optgroup": "HTMLOptGroupElement",
    "option": "HTMLOptionElement",
    "output": "HTMLOutputElement",
    "p": "HTMLParagraphElement",
    "picture": "HTMLPictureElement",
    "pre": "HTMLPreElement",
    "progress": "HTMLProgressElement",
    "q": "HTMLQuoteElement",
    "rp": "HTMLElement",
    "rt": "HTMLElement",
    "ruby": "HTMLElement",
    "s": "HTMLElement",
    "samp": "HTMLElement",
    "script": "HTMLScriptElement",
    "search": "HTMLElement",
    "section": "HTMLElement",
    "select": "HTMLSelectElement",
    "slot": "HTMLSlotElement",
    "small": "HTMLElement",
    "source": "HTMLSourceElement",
    "span": "HTMLSpanElement",
    "strong": "HTMLElement",
    "style": "HTMLStyleElement",
    "sub": "HTMLElement",
    "summary": "HTMLElement",
    "sup": "HTMLElement",
    "svg": "SVGSVGElement",
    "table": "HTMLTableElement",
    "tbody": "HTMLTableSectionElement",
    "td": "HTMLTableCellElement",
    "template": "HTMLTemplateElement",
    "textarea": "HTMLTextAreaElement",
    "tfoot": "HTMLTableSectionElement",
    "th": "HTMLTableCellElement",
    "thead": "HTMLTableSectionElement",
    "time": "HTMLTimeElement",
    "title": "HTMLTitleElement",
    "tr": "HTMLTableRowElement",
    "track": "HTMLTrackElement",
    "u": "HTMLElement",
    "ul": "HTMLUListElement",
    "var": "HTMLElement",
    "video": "HTMLVideoElement",
    "wbr": "HTMLElement",
}

FRAGMENT_TYPE = "declare const $$AK$$contents: DocumentFragment;\nexport default $$AK$$contents;\n"


def collect_exports(nodes: list[Node]) -> dict[str, str]:
    """
    Map each element id to its tag name, in document order.

    Raises ValidationError for an empty or hyphenated id, or an id used
    twice. Nothing is returned when any id is invalid.
    """
    exports: dict[str, str] = {}
    for node in create_fragment(nodes).depth_first():
        if node.type != ELEMENT or "id" not in node.attributes:
            continue
        element_id = node.attributes["id"]
        if not element_id or "-" in element_id:
            raise ValidationError(f'Invalid element ID "{element_id}"')
        if element_id in exports:
            raise ValidationError(f'Duplicate element ID "{element_id}"')
        exports[element_id] = node.name
    logger.debug("Collected %d element export(s)", len(exports))
    return exports


def render_module(exports: dict[str, str], html_text: str) -> str:
    """JavaScript module exporting each element by id and the fragment as default."""
    lines = [
        f"export const {name} = /*@__PURE__*/ document.getElementById('{name}');"
        for name in exports
    ]
    lines += [
        "export default /*@__PURE__*/ (() => {",
        "  const template = document.createElement('template');",
        f"  template.innerHTML = {json.dumps(html_text, ensure_ascii=False)};",
        "  return template.content;",
        "})();",
    ]
    return "\n".join(lines)


def render_type_definitions(exports: dict[str, str]) -> str:
    """Type definitions (.d.ts text) matching `render_module`."""
    defs = [
        f"export const {name}: {TAG_INTERFACES.get(tag, f'Element /* <{tag}> */')};"
        for name, tag in exports.items()
    ]
    defs.append(FRAGMENT_TYPE)
    return "\n".join(defs)
