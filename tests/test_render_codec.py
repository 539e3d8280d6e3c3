import pytest

from transkit.codec import components_from_json, node_from_json, node_to_json
from transkit.errors import NodeCodecError
from transkit.nodes import Element, InterpolationObject, PlaceholderNode, element, interp
from transkit.render import render_to_markup


class TestRenderToMarkup:
    def test_text_and_elements(self):
        nodes = ["Hallo ", Element(tag="strong", children="Freund", key="strong-1"), " & more"]
        assert render_to_markup(nodes) == "Hallo <strong>Freund</strong> &amp; more"

    def test_void_elements_and_attributes(self):
        nodes = ["a", element("br"), element("a", "docs", href="/docs")]
        assert render_to_markup(nodes) == 'a<br><a href="/docs">docs</a>'

    def test_nested_text_tails(self):
        nodes = [element("p", "x ", element("i", "y"), " z"), "!"]
        assert render_to_markup(nodes) == "<p>x <i>y</i> z</p>!"

    def test_components_and_placeholders(self):
        def Link(to=None, children=None):
            return Element(tag="a", props={"href": to}, children=children)

        nodes = [Element(tag=Link, props={"to": "/home"}, children="home"), PlaceholderNode(children=["!"])]
        assert render_to_markup(nodes) == '<a href="/home">home</a>!'

    def test_skips_empty_values(self):
        assert render_to_markup([None, False, "", "a", interp(count=1)]) == "a"
        assert render_to_markup([]) == ""

    def test_invalid_tag_renders_children_only(self):
        assert render_to_markup([Element(tag="1bad", children="text")]) == "text"


class TestJsonCodec:
    def test_node_from_json(self):
        data = [
            "Hello ",
            {"tag": "a", "props": {"href": "/x"}, "children": "link"},
            {"$interpolate": {"count": 2}, "format": "number"},
            {"tag": "ul", "children": [{"tag": "li", "children": "a"}], "dynamic": True},
        ]
        nodes = node_from_json(data)
        assert nodes[0] == "Hello "
        assert nodes[1] == element("a", "link", href="/x")
        assert nodes[2] == InterpolationObject(values={"count": 2}, format="number")
        assert nodes[3].is_dynamic_list
        assert nodes[3].children == [element("li", "a")]

    def test_node_to_json(self):
        nodes = ["x", Element(tag="b", children="y", key=1), interp(count=2), Element(tag="ul", children=[], is_dynamic_list=True)]
        assert node_to_json(nodes) == [
            "x",
            {"tag": "b", "children": "y", "key": 1},
            {"$interpolate": {"count": 2}},
            {"tag": "ul", "children": [], "dynamic": True},
        ]

    def test_component_tags_use_their_name(self):
        def Link(**props):
            return None

        assert node_to_json(Element(tag=Link)) == {"tag": "Link"}

    def test_components(self):
        assert components_from_json({"bold": {"tag": "strong"}}) == {"bold": Element(tag="strong")}
        assert components_from_json([{"tag": "b"}]) == [Element(tag="b")]
        assert components_from_json(None) is None
        with pytest.raises(NodeCodecError):
            components_from_json("bold")

    @pytest.mark.parametrize("bad", [
        {"nothing": 1},
        {"tag": ""},
        {"tag": "a", "props": []},
        {"$interpolate": [1]},
    ])
    def test_rejects_unknown_shapes(self, bad):
        with pytest.raises(NodeCodecError):
            node_from_json(bad)
