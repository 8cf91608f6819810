"""
Unit tests for the HTML format (tokenizer adapter and serializer).
"""

from htmldoc.dom import COMMENT, DOCTYPE, ELEMENT, TEXT, create_element, create_text
from htmldoc.formats.base import registry
from htmldoc.formats.html import HtmlFormat, parse_html, serialize_html


class TestHtmlFormat:
    def setup_method(self):
        self.fmt = HtmlFormat()

    def test_name(self):
        assert self.fmt.name == "html"

    def test_extensions(self):
        assert ".html" in self.fmt.extensions
        assert ".htm" in self.fmt.extensions

    def test_registered(self):
        assert registry.get_by_name("html") is not None
        assert registry.get_by_extension("htm").name == "html"

    def test_detect(self):
        assert self.fmt.detect("  <!DOCTYPE html><p>")
        assert self.fmt.detect("<html lang=en>")
        assert not self.fmt.detect("<div>fragment</div>")

    def test_registry_detect_by_filename(self):
        fmt = registry.detect("<div></div>", "index.HTML")
        assert fmt is not None
        assert fmt.name == "html"

    def test_registry_detect_by_content(self):
        assert registry.detect("<!doctype html>", None).name == "html"
        assert registry.detect("<div></div>", "notes") is None


class TestParse:
    def test_empty(self):
        assert parse_html("") == []

    def test_node_kinds(self):
        nodes = parse_html("<!DOCTYPE html><!-- c --><p>x</p>")
        assert [n.type for n in nodes] == [DOCTYPE, COMMENT, ELEMENT]
        assert nodes[0].name == "html"
        assert nodes[1].value == " c "
        assert nodes[2].children == [create_text("x")]

    def test_nesting_and_attributes(self):
        nodes = parse_html('<div id="a" hidden><span class="b">t</span></div>')
        div = nodes[0]
        assert div.attributes == {"id": "a", "hidden": ""}
        assert div.children[0].name == "span"
        assert div.children[0].attributes == {"class": "b"}

    def test_void_elements_not_nested(self):
        nodes = parse_html('<meta charset="utf-8"><title>T</title>')
        assert [n.name for n in nodes] == ["meta", "title"]
        assert nodes[0].children == []

    def test_self_closing(self):
        nodes = parse_html("<br/><p>x</p>")
        assert [n.name for n in nodes] == ["br", "p"]

    def test_unmatched_end_tag_ignored(self):
        nodes = parse_html("<p>a</span>b</p>")
        assert nodes[0].children == [create_text("ab")]

    def test_unclosed_elements_closed(self):
        nodes = parse_html("<div><p>x")
        assert nodes[0].children[0].children == [create_text("x")]

    def test_first_duplicate_attribute_wins(self):
        assert parse_html('<p id="a" id="b"></p>')[0].attributes == {"id": "a"}

    def test_entities_decoded(self):
        nodes = parse_html('<a href="?a=1&amp;b=2">x &lt; y</a>')
        assert nodes[0].attributes["href"] == "?a=1&b=2"
        assert nodes[0].children[0].value == "x < y"

    def test_pre_text_exact(self):
        nodes = parse_html("<pre>1\n  2</pre>")
        assert nodes[0].children == [create_text("1\n  2")]

    def test_script_raw(self):
        nodes = parse_html("<script>if (a < b) {}</script>")
        assert nodes[0].children[0].value == "if (a < b) {}"

    def test_whitespace_text_kept(self):
        nodes = parse_html("<b>a</b> <i>b</i>")
        assert nodes[1].type == TEXT
        assert nodes[1].value == " "


class TestSerialize:
    def test_doctype_lowercase(self):
        assert serialize_html(parse_html("<!DOCTYPE html>")) == "<!doctype html>"

    def test_void_element(self):
        assert serialize_html([create_element("link", {"rel": "icon", "href": "/i.png"})]) == '<link rel="icon" href="/i.png">'

    def test_empty_element(self):
        assert serialize_html([create_element("body")]) == "<body></body>"

    def test_attribute_escaping(self):
        node = create_element("a", {"href": "?a=1&b=2", "title": 'say "hi"'})
        assert serialize_html([node]) == '<a href="?a=1&amp;b=2" title="say &quot;hi&quot;"></a>'

    def test_bare_attribute(self):
        assert serialize_html([create_element("input", {"disabled": ""})]) == "<input disabled>"

    def test_text_escaping(self):
        assert serialize_html([create_element("p", children=[create_text("a < b & c")])]) == "<p>a &lt; b &amp; c</p>"

    def test_raw_text_elements(self):
        node = create_element("style", children=[create_text("a > b { color: red }")])
        assert serialize_html([node]) == "<style>a > b { color: red }</style>"

    def test_comment(self):
        assert serialize_html(parse_html("<!-- c -->")) == "<!-- c -->"

    def test_round_trip(self):
        markup = '<div id="a"><p class="x">Hello <b>world</b></p>\n<pre>1\n  2</pre></div>'
        assert serialize_html(parse_html(markup)) == markup
