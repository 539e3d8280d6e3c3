from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Union

_KEEP = object()


@dataclass
class Element:
    """
    A structural node of the tree handed to Trans.

    `tag` is either a literal tag name ("strong", "br") or a component (any callable).
    `props` holds the attributes only; children live in `children`, which may be a list
    of nodes, a single node, or None when the element has no children at all.
    """
    tag: Any
    props: Dict[str, Any] = field(default_factory=dict)
    children: Any = None
    key: Any = None
    is_dynamic_list: bool = False

    def clone(self, children: Any = _KEEP, key: Any = _KEEP) -> "Element":
        """Copy of this element with a new children payload and/or key."""
        changes = {}
        if children is not _KEEP:
            changes["children"] = children
        if key is not _KEEP:
            changes["key"] = key
        return replace(self, props=dict(self.props), **changes)


@dataclass
class InterpolationObject:
    """
    A `{{name}}` / `{{name, format}}` placeholder given as a value.

    Exactly one data key is valid. A "format" entry inside `values` is treated like the
    `format` field and never counted as data.
    """
    values: Dict[str, Any] = field(default_factory=dict)
    format: Optional[str] = None

    @property
    def data_keys(self) -> List[str]:
        return [k for k in self.values if k != "format"]

    @property
    def effective_format(self) -> Optional[str]:
        return self.format or self.values.get("format")

    @property
    def is_valid(self) -> bool:
        return len(self.data_keys) == 1

    def data(self) -> Dict[str, Any]:
        return {k: v for k, v in self.values.items() if k != "format"}


@dataclass
class PlaceholderNode:
    """
    Synthetic node of the reconciler.

    With `dummy=True` it wraps the whole original tree so the translation can be walked
    with one extra root level; otherwise it stands in for a tag that matched nothing.
    """
    children: Any = None
    props: Dict[str, Any] = field(default_factory=dict)
    dummy: bool = False


@dataclass
class MarkupTag:
    name: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["MarkupNode"] = field(default_factory=list)
    void: bool = False


@dataclass
class MarkupText:
    content: str


MarkupNode = Union[MarkupTag, MarkupText]
Node = Union[str, Element, InterpolationObject, None]


def element(tag: Any, *children: Any, key: Any = None, dynamic: bool = False, **props: Any) -> Element:
    """
    Shorthand for building elements: element("strong", "bold") or
    element("a", "docs", href="/docs"). A single child is stored as-is, several as a list.
    """
    if not children:
        payload = None
    elif len(children) == 1:
        payload = children[0]
    else:
        payload = list(children)
    return Element(tag=tag, props=props, children=payload, key=key, is_dynamic_list=dynamic)


def interp(format: Optional[str] = None, **values: Any) -> InterpolationObject:
    return InterpolationObject(values=values, format=format)


def as_list(data: Any) -> List[Any]:
    if isinstance(data, (list, tuple)):
        return list(data)
    return [data]


def is_absent(value: Any) -> bool:
    """True for the values an element can hold instead of children (None, "", 0, False)."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, int, float)):
        return not value
    return False


def has_children(node: Any, check_length: bool = False) -> bool:
    if isinstance(node, (Element, PlaceholderNode, MarkupTag)):
        base = node.children
    else:
        return False
    if check_length:
        return base is not None and len(base) > 0
    return not is_absent(base)


def get_children(node: Any) -> Any:
    if node is None:
        return []
    if isinstance(node, Element):
        return as_list(node.children) if node.is_dynamic_list else node.children
    if isinstance(node, (PlaceholderNode, MarkupTag)):
        return node.children
    return None


def has_valid_element_children(children: Any) -> bool:
    if not isinstance(children, (list, tuple)):
        return False
    return all(isinstance(child, Element) for child in children)


def prop_count(node: Element) -> int:
    """Attributes plus the children and dynamic-list entries of a props object."""
    count = len(node.props)
    if node.children is not None:
        count += 1
    if node.is_dynamic_list:
        count += 1
    return count


def merge_props(attrs: Mapping[str, Any], target: Any) -> Any:
    """
    Returns `target` with the parsed tag attributes merged into its props.

    Attributes from the translation win over equal keys already set on the target;
    everything else about the target is kept. Targets without props come back as they are.
    """
    if isinstance(target, (Element, PlaceholderNode)):
        return replace(target, props={**target.props, **attrs})
    return target
