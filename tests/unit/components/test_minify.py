"""
Unit tests for the minifier.
"""

import copy

from htmldoc.dom import create_comment, create_element, create_text
from htmldoc.minify import collapse_whitespace, minify


class TestCollapseWhitespace:
    def test_collapses_runs(self):
        assert collapse_whitespace("a \n\t b") == "a b"

    def test_trims(self):
        assert collapse_whitespace("  hello  ") == "hello"

    def test_whitespace_only_keeps_one_space(self):
        assert collapse_whitespace("\n   \n") == " "

    def test_empty_stays_empty(self):
        assert collapse_whitespace("") == ""


class TestMinify:
    def test_drops_comments(self):
        result = minify([create_element("p", children=[create_comment("x"), create_text("hi")])])
        assert result == [create_element("p", children=[create_text("hi")])]

    def test_drops_nested_comments(self):
        tree = [create_element("div", children=[create_element("span", children=[create_comment("deep")])])]
        result = minify(tree)
        assert result[0].children[0].children == []

    def test_keeps_space_between_inline_elements(self):
        tree = [create_element("p", children=[
            create_element("b", children=[create_text("a")]),
            create_text("\n    "),
            create_element("i", children=[create_text("b")]),
        ])]
        result = minify(tree)
        assert result[0].children[1] == create_text(" ")

    def test_merges_text_around_dropped_comment(self):
        tree = [create_element("p", children=[
            create_text("one "),
            create_comment("gone"),
            create_text("  two"),
        ])]
        result = minify(tree)
        assert result[0].children == [create_text("one two")]

    def test_drops_empty_text(self):
        result = minify([create_element("p", children=[create_text("")])])
        assert result[0].children == []

    def test_trims_root_edges(self):
        tree = [create_text("\n"), create_element("div"), create_text("\n  ")]
        assert minify(tree) == [create_element("div")]

    def test_preserves_attributes(self):
        result = minify([create_element("a", {"href": "/x", "class": "y"})])
        assert result[0].attributes == {"href": "/x", "class": "y"}

    def test_whitespace_sensitive_untouched(self):
        for name in ("pre", "textarea", "script", "style"):
            node = create_element(name, children=[create_text("1\n  2"), create_comment(" keep ")])
            result = minify([node])
            assert result == [node]

    def test_whitespace_sensitive_nested_content_untouched(self):
        node = create_element("pre", children=[create_element("b", children=[create_text("  x  ")])])
        assert minify([node])[0].children[0].children[0].value == "  x  "

    def test_returns_new_nodes(self):
        pre = create_element("pre", children=[create_text(" a ")])
        tree = [create_element("div", children=[pre])]
        result = minify(tree)
        assert result[0] is not tree[0]
        assert result[0].children[0] is not pre

    def test_input_not_mutated(self):
        tree = [create_comment("c"), create_element("p", children=[create_text("  a  b  ")])]
        before = copy.deepcopy(tree)
        minify(tree)
        assert tree == before

    def test_fixpoint(self):
        tree = [
            create_text("  "),
            create_element("div", children=[
                create_text(" x\n y "),
                create_comment("c"),
                create_element("span"),
                create_text("\n"),
                create_element("pre", children=[create_text(" a\n\n b ")]),
            ]),
            create_comment("tail"),
        ]
        once = minify(tree)
        assert minify(once) == once

    def test_empty_input(self):
        assert minify([]) == []
