"""Tests for node traversal and serialization."""

import unittest

from tagtree import parse
from tagtree.node import Document, Element, EntityNode
from tagtree.serialize import pretty_print, to_text
from tagtree.tokens import Comment, StartTag, TagAttribute, Text


class TestTraversal(unittest.TestCase):
    def setUp(self):
        self.root = parse("<ul><li>1</li><li>2</li></ul><div><ul><li>3</li></ul></div>")

    def test_first_last_and_count(self):
        """first_child, last_child and child_count reflect the children list."""
        assert self.root.first_child.tag_name == "ul"
        assert self.root.last_child.tag_name == "div"
        assert self.root.child_count == 2
        assert [node.tag_name for node in self.root] == ["ul", "div"]

    def test_empty_node_accessors(self):
        """A node without children has no first or last child."""
        empty = Document()
        assert empty.first_child is None
        assert empty.last_child is None
        assert empty.child_count == 0

    def test_find_and_direct_matches(self):
        """find() and direct_matches() only look at direct children."""
        ul = self.root.find("ul")
        assert ul is self.root.first_child
        assert self.root.find("li") is None
        assert len(ul.direct_matches("li")) == 2
        assert self.root.direct_matches("li") == []

    def test_find_all_descends_until_matches(self):
        """find_all() searches every branch that has no direct match."""
        items = self.root.find_all("li")
        assert [item.first_child.entity.data for item in items] == ["1", "2", "3"]

    def test_find_all_stops_at_first_matching_level(self):
        """find_all() does not descend below a level that matched."""
        root = parse("<div><p>a</p><section><p>b</p></section></div>")
        matches = root.first_child.find_all("p")
        assert len(matches) == 1
        assert matches[0].first_child.entity.data == "a"

    def test_for_each(self):
        """for_each() calls the function on every find_all() match in order."""
        seen = []
        self.root.for_each("li", lambda node: seen.append(node.to_text()))
        assert seen == ["<li>1</li>", "<li>2</li>", "<li>3</li>"]

    def test_has_ancestor(self):
        """has_ancestor() walks parent links but skips the node itself."""
        li = self.root.last_child.first_child.first_child
        assert li.has_ancestor("div")
        assert li.has_ancestor("ul")
        assert not li.has_ancestor("li")


class TestElement(unittest.TestCase):
    def test_attribute_lookup(self):
        """Attributes are looked up case-insensitively with a default."""
        a = parse("<a HREF='x' hidden>t</a>").first_child
        assert a.get("href") == "x"
        assert a.get("HREF") == "x"
        assert a.get("hidden") is None
        assert a.get("missing", "d") == "d"
        assert a.attributes["href"] == TagAttribute("HREF", "x", "'")

    def test_void_rejects_children(self):
        """Void elements refuse child nodes."""
        br = Element(StartTag("br"), void=True)
        with self.assertRaises(ValueError):
            br.append_child(EntityNode(Text("x")))

    def test_leaf_rejects_children(self):
        """Entity nodes refuse child nodes."""
        leaf = EntityNode(Comment("c"))
        with self.assertRaises(ValueError):
            leaf.append_child(EntityNode(Text("x")))

    def test_append_child_sets_parent(self):
        """append_child() links the child back to its parent."""
        doc = Document()
        p = Element(StartTag("p"))
        doc.append_child(p)
        p.append_child(EntityNode(Text("hi")))
        assert p.parent is doc
        assert p.first_child.parent is p
        assert to_text(doc) == "<p>hi</p>"
        assert str(p) == "<p>hi</p>"


class TestPrettyPrint(unittest.TestCase):
    def test_siblings_on_own_lines(self):
        """Sibling elements are printed one per line, indented by a tab."""
        root = parse("<div><p>a</p><p>b</p></div>")
        assert root.pretty_print() == "<div>\n\t<p>a</p>\n\t<p>b</p>\n</div>\n"

    def test_nested_levels(self):
        """Each nesting level adds one tab."""
        root = parse("<html><body><p>x</p></body></html>")
        assert root.pretty_print() == "<html>\n\t<body>\n\t\t<p>x</p>\n\t</body>\n</html>\n"

    def test_single_void_child_is_inline(self):
        """A lone child without a body stays on its parent's line."""
        assert parse("<p><br></p>").pretty_print() == "<p><br></p>\n"

    def test_empty_element(self):
        """An empty element puts its end tag on the next line."""
        assert parse("<div></div>").pretty_print() == "<div>\n</div>\n"

    def test_mixed_leaf_children(self):
        """Several leaf children each get their own line."""
        root = parse("<p>a<!-- c --></p>")
        assert root.pretty_print() == "<p>\n\ta\n\t<!-- c -->\n</p>\n"

    def test_top_level_entities(self):
        """Every top-level node ends with a newline."""
        root = parse("<!DOCTYPE html><script>var a;</script><p>a</p>")
        assert root.pretty_print() == "<!DOCTYPE html>\n<script>var a;</script>\n<p>a</p>\n"

    def test_depth_argument(self):
        """A starting depth indents the whole subtree."""
        div = parse("<div><p>a</p></div>").first_child
        assert pretty_print(div, 1) == "\t<div>\n\t\t<p>a</p>\n\t</div>"
        assert div.pretty_print(1) == pretty_print(div, 1)

    def test_recovered_closing_tags_are_emitted(self):
        """End tags added by recovery are printed."""
        root = parse("<div><span>a</div>")
        assert root.pretty_print() == "<div>\n\t<span>a</span>\n</div>\n"

    def test_deeply_nested_pretty_print(self):
        """Pretty printing handles a thousand nested elements."""
        depth = 1000
        root = parse("<div>" * depth + "<p>x</p>" + "</div>" * depth)
        lines = root.pretty_print().splitlines()
        assert len(lines) == 2 * depth + 1
        assert lines[0] == "<div>"
        assert lines[depth] == "\t" * depth + "<p>x</p>"
        assert lines[-1] == "</div>"

    def test_find_all_in_deep_tree(self):
        """find_all() reaches a match a thousand levels down."""
        depth = 1000
        root = parse("<div>" * depth + "<p>x</p>" + "</div>" * depth)
        matches = root.find_all("p")
        assert len(matches) == 1
        assert matches[0].to_text() == "<p>x</p>"
