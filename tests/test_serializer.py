import unittest

from transkit.config.options import TransOptions
from transkit.diagnostics import (
    BAD_INTERPOLATION_USAGE,
    MALFORMED_INTERPOLATION,
    NULL_CHILD,
    Diagnostics,
)
from transkit.nodes import Element, InterpolationObject, element, interp
from transkit.serializer import nodes_to_string


class TestNodesToString(unittest.TestCase):
    def setUp(self):
        self.options = TransOptions()
        self.diagnostics = Diagnostics()

    def serialize(self, children, options=None):
        return nodes_to_string(children, options or self.options, self.diagnostics)

    def test_text_and_index_tag(self):
        no_keep = TransOptions(trans_keep_basic_html_nodes_for=())
        children = ["a", Element(tag="B", children=["bold"])]
        self.assertEqual(self.serialize(children, no_keep), "a<1>bold</1>")

    def test_kept_void_tag_is_self_closing(self):
        opts = TransOptions(trans_keep_basic_html_nodes_for=("br",))
        self.assertEqual(self.serialize(["x", Element(tag="br")], opts), "x<br/>")

    def test_kept_tag_with_attributes_uses_index(self):
        children = ["a ", element("br", className="sep"), element("strong", "bold", className="x")]
        self.assertEqual(self.serialize(children), "a <1></1><2>bold</2>")

    def test_kept_tag_with_plain_string_child(self):
        children = ["dolor ", element("strong", "bold"), " amet"]
        self.assertEqual(self.serialize(children), "dolor <strong>bold</strong> amet")

    def test_kept_tag_with_element_children_uses_index(self):
        children = [element("p", "a ", element("i", "b"))]
        self.assertEqual(self.serialize(children), "<0>a <i>b</i></0>")

    def test_dynamic_list_is_never_expanded(self):
        items = [element("li", name) for name in ("a", "b", "c")]
        children = ["List: ", Element(tag="ul", children=items, is_dynamic_list=True)]
        self.assertEqual(self.serialize(children), "List: <1></1>")

    def test_nested_indices_are_local(self):
        children = ["Hello ", element("p", "a ", element("a", "link", href="#"), interp(name="x"))]
        self.assertEqual(self.serialize(children), "Hello <1>a <1>link</1>{{name}}</1>")

    def test_component_tag(self):
        def Link(**props):
            return None

        children = ["Go ", Element(tag=Link, props={"to": "/"}, children="home")]
        self.assertEqual(self.serialize(children), "Go <1>home</1>")

    def test_interpolation_objects(self):
        self.assertEqual(self.serialize([interp(count=5)]), "{{count}}")
        self.assertEqual(self.serialize([interp(format="number", count=5)]), "{{count, number}}")
        legacy = InterpolationObject(values={"count": 5, "format": "number"})
        self.assertEqual(self.serialize([legacy]), "{{count, number}}")
        self.assertEqual(len(self.diagnostics), 0)

    def test_malformed_interpolation_warns_and_drops(self):
        self.assertEqual(self.serialize([interp(a=1, b=2)]), "")
        self.assertEqual(self.diagnostics.codes, [MALFORMED_INTERPOLATION])

    def test_null_child_warns_and_drops(self):
        self.assertEqual(self.serialize([None, "a"]), "a")
        self.assertEqual(self.diagnostics.codes, [NULL_CHILD])

    def test_bare_scalar_warns_and_drops(self):
        self.assertEqual(self.serialize(["a", 5, True]), "a")
        self.assertEqual(self.diagnostics.codes, [BAD_INTERPOLATION_USAGE, BAD_INTERPOLATION_USAGE])

    def test_basic_html_support_disabled(self):
        opts = TransOptions(trans_support_basic_html_nodes=False)
        children = ["x", element("br"), element("strong", "bold")]
        self.assertEqual(self.serialize(children, opts), "x<1></1><2>bold</2>")

    def test_empty_children(self):
        self.assertEqual(self.serialize(None), "")
        self.assertEqual(self.serialize([]), "")
        self.assertEqual(self.serialize("just text"), "just text")

    def test_mixed_sentence(self):
        children = ["lorem ", element("br"), " ipsum ", interp(count=2)]
        self.assertEqual(self.serialize(children), "lorem <br/> ipsum {{count}}")

    def test_callback_sees_diagnostics(self):
        seen = []
        diagnostics = Diagnostics(callback=seen.append)
        nodes_to_string([None], self.options, diagnostics)
        self.assertEqual([d.code for d in seen], [NULL_CHILD])


if __name__ == "__main__":
    unittest.main()
