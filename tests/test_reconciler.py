import unittest

from transkit.config.options import TransOptions
from transkit.diagnostics import Diagnostics
from transkit.nodes import Element, element, interp
from transkit.reconciler import MISSING_PLACEHOLDER, render_nodes
from transkit.serializer import nodes_to_string


def replace_count(text, values, language):
    return text.replace("{{count}}", str(values["count"]))


class TestRenderNodes(unittest.TestCase):
    def setUp(self):
        self.diagnostics = Diagnostics()

    def test_plain_text_without_children_comes_back_unchanged(self):
        self.assertEqual(render_nodes([], "plain <b>text</b>"), ["plain <b>text</b>"])
        self.assertEqual(render_nodes(None, "plain"), ["plain"])

    def test_kept_tags_without_original_children(self):
        result = render_nodes([], "a <br/> b <strong>c</strong>")
        self.assertEqual(result, [
            "a ",
            Element(tag="br", key="br-1"),
            " b ",
            Element(tag="strong", children="c", key="strong-3"),
        ])

    def test_empty_target(self):
        self.assertEqual(render_nodes(["a"], ""), [])
        self.assertEqual(render_nodes(["a"], None), [])

    def test_values_come_from_the_tree(self):
        result = render_nodes([interp(count=5)], "{{count}}", interpolate=replace_count)
        self.assertEqual(result, ["5"])

    def test_explicit_values_win(self):
        result = render_nodes([interp(count=5)], "{{count}}", values={"count": 7})
        self.assertEqual(result, ["7"])

    def test_unsupported_void_tag_becomes_text(self):
        opts = TransOptions(trans_support_basic_html_nodes=False)
        self.assertEqual(render_nodes(["text"], "<hr/>", options=opts), ["<hr />"])

    def test_unknown_tag_becomes_text(self):
        self.assertEqual(render_nodes(["x"], "a <em>b</em>"), ["a ", "<em>b</em>"])

    def test_reordered_index_tags(self):
        a = Element(tag="span", props={"id": "a"})
        b = Element(tag="span", props={"id": "b"})
        result = render_nodes([a, b], "<1></1><0></0>")
        self.assertEqual(result, [
            Element(tag="span", props={"id": "b"}, key=0),
            Element(tag="span", props={"id": "a"}, key=1),
        ])

    def test_mixed_sentence(self):
        children = ["lorem ", element("br"), " ipsum ", interp(count=2)]
        result = render_nodes(children, "lorem <br/> ipsum {{count}}")
        self.assertEqual(result[0], "lorem ")
        self.assertIsInstance(result[1], Element)
        self.assertEqual(result[1].tag, "br")
        self.assertEqual(result[1].key, "br-1")
        self.assertEqual("".join(result[2:]), " ipsum 2")

    def test_round_trip_keeps_placeholder_structure(self):
        children = [
            "Hello ",
            element("strong", "you", className="x"),
            ", see ",
            element("a", "docs", href="/docs"),
            interp(name="Ann"),
        ]
        key = nodes_to_string(children)
        self.assertEqual(key, "Hello <1>you</1>, see <3>docs</3>{{name}}")

        rendered = render_nodes(children, key)
        self.assertEqual(nodes_to_string(rendered), "Hello <1>you</1>, see <3>docs</3>Ann")

    def test_kept_tag_round_trip(self):
        rendered = render_nodes(["dolor ", element("strong", "bold")], "dolor <strong>fett</strong>")
        self.assertEqual(rendered[1], Element(tag="strong", children="fett", key="strong-1"))
        self.assertEqual(nodes_to_string(rendered), "dolor <strong>fett</strong>")

    def test_dynamic_list_keeps_original_items(self):
        items = [element("li", name) for name in ("a", "b")]
        children = ["List: ", Element(tag="ul", children=items, is_dynamic_list=True)]
        result = render_nodes(children, "Liste: <1></1>")
        self.assertEqual(result[0], "Liste: ")
        self.assertEqual(result[1].children, items)
        self.assertTrue(result[1].is_dynamic_list)
        self.assertEqual(nodes_to_string(result), "Liste: <1></1>")

    def test_element_children_not_addressed_are_kept(self):
        inner = [element("b", "x"), element("i", "y")]
        result = render_nodes([Element(tag="div", children=inner)], "<0></0>")
        self.assertEqual(result[0].children, inner)

    def test_named_components(self):
        components = {"bold": element("strong"), "link": element("a", href="/x")}
        result = render_nodes(components, "Click <link>here</link> or <bold>now</bold>!")
        self.assertEqual(result, [
            "Click ",
            Element(tag="a", props={"href": "/x"}, children="here", key=1),
            " or ",
            Element(tag="strong", children="now", key=3),
            "!",
        ])

    def test_self_closing_named_component(self):
        components = {"icon": element("img", src="a.png")}
        result = render_nodes(components, "Look <icon/> here")
        self.assertEqual(result[1], Element(tag="img", props={"src": "a.png"}, key=1))

    def test_childless_element_takes_translated_text(self):
        children = ["some ", Element(tag="span", props={"class": "hl"})]
        result = render_nodes(children, "some <1>highlighted</1> text")
        self.assertEqual(result[1], Element(tag="span", props={"class": "hl"}, children="highlighted", key=1))
        self.assertEqual(result[2], " text")

    def test_translation_attributes_are_merged(self):
        children = ["a", Element(tag="a", props={"href": "/x", "class": "old"}, children="link")]
        result = render_nodes(children, 'a<1 class="new">link</1>')
        self.assertEqual(result[1].props, {"href": "/x", "class": "new"})
        self.assertEqual(result[1].children, "link")

    def test_string_child_is_interpolated(self):
        result = render_nodes(["Hi {{name}}"], "<0></0>!", values={"name": "Ann"})
        self.assertEqual(result, ["Hi Ann", "!"])

    def test_tag_moved_to_another_level_resolves_from_root(self):
        children = ["a", element("b", "bold"), " and ", element("em", "x")]
        result = render_nodes(children, "<3>x <1>bold</1></3>")
        self.assertEqual(len(result), 1)
        em = result[0]
        self.assertEqual(em.tag, "em")
        self.assertEqual(em.children, ["x ", Element(tag="b", children="bold", key=1)])

    def test_missing_placeholder_is_reported(self):
        result = render_nodes(["a"], "x <5>y</5>", diagnostics=self.diagnostics)
        self.assertEqual(result, ["x ", "y"])
        self.assertEqual(self.diagnostics.codes, [MISSING_PLACEHOLDER])

    def test_wrap_text_nodes(self):
        opts = TransOptions(trans_wrap_text_nodes="span")
        result = render_nodes(["a", element("b", "x")], "a<1>x</1>", options=opts)
        self.assertEqual(result[0], Element(tag="span", children="a", key="text-0"))
        self.assertEqual(result[1].tag, "b")

    def test_unescape(self):
        self.assertEqual(render_nodes([], "a &amp; b &lt;3", should_unescape=True), ["a & b <3"])
        self.assertEqual(render_nodes([], "a &amp; b"), ["a &amp; b"])


if __name__ == "__main__":
    unittest.main()
