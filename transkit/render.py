from typing import Any

from lxml import etree

from transkit.logger import get_logger
from transkit.nodes import Element, InterpolationObject, PlaceholderNode, as_list

logger = get_logger(__name__)

_WRAPPER = "div"


def _append_text(parent: etree._Element, text: str):
    if not text:
        return
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text


def _render_into(parent: etree._Element, nodes: Any):
    for node in as_list(nodes):
        if node is None or isinstance(node, bool) or node == "":
            continue
        if isinstance(node, str):
            _append_text(parent, node)
        elif isinstance(node, Element):
            _render_element(parent, node)
        elif isinstance(node, PlaceholderNode):
            _render_into(parent, node.children)
        elif isinstance(node, InterpolationObject):
            # left unresolved, nothing to show
            continue
        else:
            _append_text(parent, str(node))


def _render_element(parent: etree._Element, node: Element):
    if callable(node.tag):
        # components render whatever they return for their props and children
        _render_into(parent, node.tag(**node.props, children=node.children))
        return
    if not isinstance(node.tag, str) or not node.tag:
        _render_into(parent, node.children)
        return

    attrib = {name: str(value) for name, value in node.props.items() if value is not None}
    try:
        el = etree.SubElement(parent, node.tag, attrib=attrib)
    except ValueError as e:
        logger.warning(f"Cannot render <{node.tag}> as HTML: {e}")
        _render_into(parent, node.children)
        return
    _render_into(el, node.children)


def render_to_markup(nodes: Any) -> str:
    """Renders a node list (e.g. the result of trans()) as an HTML fragment."""
    container = etree.Element(_WRAPPER)
    _render_into(container, nodes)
    markup = etree.tostring(container, encoding="unicode", method="html")
    return markup[len(f"<{_WRAPPER}>"):-len(f"</{_WRAPPER}>")]
