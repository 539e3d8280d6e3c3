import pytest

from transkit.errors import MarkupParseError
from transkit.markup import parse, parse_tag
from transkit.nodes import MarkupTag, MarkupText


def test_nested_index_tags():
    ast = parse("<0>a <1>b</1> c</0>")
    assert ast == [
        MarkupTag(name="0", children=[
            MarkupText("a "),
            MarkupTag(name="1", children=[MarkupText("b")]),
            MarkupText(" c"),
        ]),
    ]


def test_void_and_self_closing_tags():
    root = parse("<0>a<br/>b<3/>c<hr></0>")[0]
    names = [(n.name, n.void) for n in root.children if isinstance(n, MarkupTag)]
    assert names == [("br", True), ("3", True), ("hr", True)]
    texts = [n.content for n in root.children if isinstance(n, MarkupText)]
    assert texts == ["a", "b", "c"]


def test_text_before_first_tag_is_kept():
    ast = parse("hello <b>x</b>")
    assert ast[0] == MarkupText("hello ")
    assert ast[1] == MarkupTag(name="b", children=[MarkupText("x")])


def test_attributes():
    tag = parse_tag("<a href=\"/x\" target='_blank'>")
    assert tag.name == "a"
    assert tag.attrs == {"href": "/x", "target": "_blank"}
    assert not tag.void

    bare = parse_tag("<input disabled>")
    assert bare.attrs == {"disabled": ""}
    assert bare.void


def test_comments_are_skipped_but_text_after_them_is_not():
    root = parse("<0>a<!-- note -->b</0>")[0]
    assert root.children == [MarkupText("a"), MarkupText("b")]


def test_whitespace_between_tags_collapses():
    root = parse("<0><1>a</1>   <2>b</2></0>")[0]
    assert root.children[1] == MarkupText(" ")


def test_lenient_mode_tolerates_stray_closing_tags():
    root = parse("<0>a</1>b</0>")[0]
    assert root.name == "0"
    assert [n.content for n in root.children] == ["a", "b"]


def test_strict_mode_rejects_stray_closing_tag():
    with pytest.raises(MarkupParseError):
        parse("<0>a</1>b</0>", strict=True)


def test_strict_mode_rejects_unclosed_tag():
    with pytest.raises(MarkupParseError):
        parse("<0>a <1>b</0>", strict=True)


def test_non_string_input():
    with pytest.raises(MarkupParseError):
        parse(None)
