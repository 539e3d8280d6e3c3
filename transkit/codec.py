"""
JSON form of node trees, used by the CLI and the HTTP service.

    "text"                                         -> "text"
    {"tag": "a", "props": {...}, "children": ...}  -> Element (optional "key", "dynamic")
    {"$interpolate": {"count": 2}, "format": "n"}  -> InterpolationObject
    null / numbers / booleans                      -> kept as-is (flagged when serialized)
"""
from typing import Any, Dict, Mapping

from transkit.errors import NodeCodecError
from transkit.nodes import Element, InterpolationObject, PlaceholderNode

INTERPOLATE_KEY = "$interpolate"


def node_from_json(data: Any) -> Any:
    if data is None or isinstance(data, (str, bool, int, float)):
        return data
    if isinstance(data, list):
        return [node_from_json(item) for item in data]
    if not isinstance(data, dict):
        raise NodeCodecError(f"Unsupported node of type {type(data).__name__}")

    if INTERPOLATE_KEY in data:
        values = data[INTERPOLATE_KEY]
        if not isinstance(values, dict):
            raise NodeCodecError(f"'{INTERPOLATE_KEY}' must be an object, got {values!r}")
        return InterpolationObject(values=dict(values), format=data.get("format"))

    if "tag" in data:
        tag = data["tag"]
        if not isinstance(tag, str) or not tag:
            raise NodeCodecError(f"Element tag must be a non-empty string, got {tag!r}")
        props = data.get("props") or {}
        if not isinstance(props, dict):
            raise NodeCodecError(f"Props of <{tag}> must be an object")
        return Element(
            tag=tag,
            props=dict(props),
            children=node_from_json(data["children"]) if "children" in data else None,
            key=data.get("key"),
            is_dynamic_list=bool(data.get("dynamic", False)),
        )

    raise NodeCodecError(f"Cannot tell what node this is: {data!r}")


def components_from_json(data: Any) -> Any:
    """Named components ({name: node}) or a positional list of them."""
    if data is None:
        return None
    if isinstance(data, dict):
        return {str(name): node_from_json(node) for name, node in data.items()}
    if isinstance(data, list):
        return node_from_json(data)
    raise NodeCodecError("Components must be an object or a list")


def node_to_json(node: Any) -> Any:
    if isinstance(node, (list, tuple)):
        return [node_to_json(item) for item in node]
    if isinstance(node, Element):
        tag = node.tag if isinstance(node.tag, str) else getattr(node.tag, "__name__", repr(node.tag))
        data: Dict[str, Any] = {"tag": tag}
        if node.props:
            data["props"] = dict(node.props)
        if node.children is not None:
            data["children"] = node_to_json(node.children)
        if node.key is not None:
            data["key"] = node.key
        if node.is_dynamic_list:
            data["dynamic"] = True
        return data
    if isinstance(node, InterpolationObject):
        data = {INTERPOLATE_KEY: dict(node.values)}
        if node.format:
            data["format"] = node.format
        return data
    if isinstance(node, PlaceholderNode):
        return node_to_json(node.children)
    if isinstance(node, Mapping):
        return {str(k): node_to_json(v) for k, v in node.items()}
    return node
