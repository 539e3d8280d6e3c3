"""
Rebuilds a node tree from a (translated) placeholder string.

The translation is parsed into a markup AST which is walked together with the original
children: "<1>" binds to the original child at index 1 of the current level, so
translators can reorder, drop or repeat tags and still get the original elements back.
Non-numeric tags are resolved through a named components mapping, rendered as basic
HTML elements when kept, or passed through as literal text.
"""
import re
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from transkit.collector import get_data
from transkit.config.options import TransOptions, get_defaults
from transkit.diagnostics import Diagnostics, ensure_diagnostics
from transkit.inline_tags import keep_tags_regex
from transkit.interpolator import Interpolator
from transkit.logger import get_logger
from transkit.markup import parse
from transkit.nodes import (
    Element,
    MarkupTag,
    MarkupText,
    PlaceholderNode,
    as_list,
    get_children,
    has_children,
    has_valid_element_children,
    is_absent,
    merge_props,
)

logger = get_logger(__name__)

MISSING_PLACEHOLDER = "missing-placeholder"

InterpolateFn = Callable[[str, Dict[str, Any], Optional[str]], str]

_INDEX_PREFIX = re.compile(r"^\s*[+-]?\d+")
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)")


def _tag_index(name: str) -> Optional[int]:
    match = _INDEX_PREFIX.match(name)
    return int(match.group(0)) if match else None


def _is_index_name(name: str) -> bool:
    return bool(_NUMBER_PREFIX.match(name))


def _single(inner: Any) -> Any:
    # a lone text child is stored as-is, like element("b", "text")
    if isinstance(inner, list) and len(inner) == 1 and isinstance(inner[0], str):
        return inner[0]
    return inner


def _as_text(nodes: Any) -> str:
    parts = []
    for node in as_list(nodes):
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, Element):
            parts.append(_as_text(node.children))
        elif node is not None:
            parts.append(str(node))
    return "".join(parts)


class Reconciler:
    def __init__(
        self,
        interpolate: InterpolateFn,
        values: Dict[str, Any],
        language: Optional[str],
        options: TransOptions,
        components: Optional[Mapping[str, Any]] = None,
        needs_html_handling: bool = False,
        should_unescape: bool = False,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self._interpolate = interpolate
        self.values = values
        self.language = language
        self.options = options
        self.keep = tuple(options.trans_keep_basic_html_nodes_for or ())
        self.components = components
        self.needs_html_handling = needs_html_handling
        self.should_unescape = should_unescape
        self.diagnostics = ensure_diagnostics(diagnostics)

    def interpolate(self, text: str) -> str:
        return self._interpolate(text, self.values, self.language)

    def map_ast(self, original: Any, ast_nodes: Any, root: List[Any]) -> List[Any]:
        """
        Walks `ast_nodes` against the original nodes of the same level.

        Args:
            original: the original node(s) of the current level.
            ast_nodes: the markup nodes parsed from the translation at this level.
            root: the outermost original children (or [components mapping]).
        """
        originals = as_list(original)
        out: List[Any] = []
        for i, node in enumerate(as_list(ast_nodes)):
            if isinstance(node, MarkupTag):
                self._map_tag(node, i, originals, root, out)
            elif isinstance(node, MarkupText):
                self._map_text(node, i, out)
        return out

    def _resolve(self, node: MarkupTag, originals: List[Any], root: List[Any]) -> Any:
        tmp = None
        index = _tag_index(node.name)
        if index is not None and index >= 0:
            if index < len(originals):
                tmp = originals[index]
            elif index < len(root):
                # indices are per level, the root fallback covers tags moved to another level
                tmp = root[index]
        if is_absent(tmp):
            tmp = None

        # components given as a mapping
        if tmp is None and len(root) == 1 and isinstance(root[0], Mapping):
            tmp = root[0].get(node.name)
            if is_absent(tmp):
                tmp = None

        if tmp is None:
            if index is not None:
                self.diagnostics.warn(
                    MISSING_PLACEHOLDER,
                    f"Trans: the translation uses <{node.name}> but there is no child at that position.",
                )
            tmp = PlaceholderNode()

        return merge_props(node.attrs, tmp) if node.attrs else tmp

    def _translation_content(self, node: MarkupTag) -> Optional[str]:
        first = node.children[0] if node.children else None
        if isinstance(first, MarkupText) and first.content:
            return self.interpolate(first.content)
        return None

    def _map_tag(self, node: MarkupTag, i: int, originals: List[Any], root: List[Any], out: List[Any]):
        child = self._resolve(node, originals, root)
        translation_content = self._translation_content(node)

        is_element = isinstance(child, Element)
        is_valid_translation_with_children = is_element and has_children(node, True) and not node.void
        is_empty_trans_with_html = (
            self.needs_html_handling and isinstance(child, PlaceholderNode) and child.dummy
        )
        is_known_component = self.components is not None and node.name in self.components

        if isinstance(child, str):
            out.append(self.interpolate(child))
        elif has_children(child) or is_valid_translation_with_children:
            inner = self.render_inner(child, node, root)
            self.push_translated(child, inner, out, i)
        elif is_empty_trans_with_html:
            # no original element for this level, reuse the current originals
            inner = self.map_ast(originals, node.children, root)
            self.push_translated(child, inner, out, i)
        elif not _is_index_name(node.name):
            if is_known_component:
                inner = self.render_inner(child, node, root)
                self.push_translated(child, inner, out, i, node.void)
            elif self.options.trans_support_basic_html_nodes and node.name in self.keep:
                if node.void:
                    out.append(Element(tag=node.name, key=f"{node.name}-{i}"))
                else:
                    inner = self.map_ast(originals, node.children, root)
                    out.append(Element(tag=node.name, children=_single(inner), key=f"{node.name}-{i}"))
            elif node.void:
                out.append(f"<{node.name} />")
            else:
                inner = self.map_ast(originals, node.children, root)
                out.append(f"<{node.name}>{_as_text(inner)}</{node.name}>")
        elif not is_element:
            # interpolation already happened upstream, only the text is left
            if node.children and translation_content:
                out.append(translation_content)
        else:
            # element without children, but the translation has some:
            # components={[<span class="x"/>]} with "some <0>highlighted</0> text"
            self.push_translated(
                child,
                translation_content,
                out,
                i,
                len(node.children) != 1 or not translation_content,
            )

    def _map_text(self, node: MarkupText, i: int, out: List[Any]):
        content = self.interpolate(node.content)
        if self.should_unescape and self.options.unescape:
            content = self.options.unescape(content)
        wrap = self.options.trans_wrap_text_nodes
        if wrap:
            out.append(Element(tag=wrap, children=content, key=f"text-{i}"))
        else:
            out.append(content)

    def render_inner(self, child: Any, node: MarkupTag, root: List[Any]) -> Any:
        children = get_children(child)
        mapped = self.map_ast(children, node.children, root)
        # dynamic lists and element-only children the translation does not address
        # keep their original children
        if (has_valid_element_children(children) and not mapped) or (
            isinstance(child, Element) and child.is_dynamic_list
        ):
            return children
        return mapped

    def push_translated(self, child: Any, inner: Any, out: List[Any], i: int, is_void: bool = False):
        if isinstance(child, PlaceholderNode):
            out.append(replace(child, children=None if is_void else inner))
        elif isinstance(child, Element):
            out.append(child.clone(key=i) if is_void else child.clone(children=_single(inner), key=i))
        elif not is_absent(inner):
            out.extend(as_list(inner))


def render_nodes(
    children: Any,
    target_string: str,
    *,
    interpolate: Optional[InterpolateFn] = None,
    values: Optional[Dict[str, Any]] = None,
    language: Optional[str] = None,
    options: Optional[TransOptions] = None,
    should_unescape: bool = False,
    diagnostics: Optional[Diagnostics] = None,
) -> List[Any]:
    """
    Builds the node list for `target_string`, re-using the original `children`.

    `children` is the original tree (a list or a single node) or a mapping of named
    components. `values` are merged over the interpolation data collected from the tree.
    """
    if target_string == "" or target_string is None:
        return []

    options = options or get_defaults()
    keep_pattern = keep_tags_regex(options.trans_keep_basic_html_nodes_for or ())
    needs_html_handling = keep_pattern is not None and bool(keep_pattern.search(target_string))

    no_children = is_absent(children) or (isinstance(children, (list, tuple, Mapping)) and not children)
    if no_children and not needs_html_handling and not should_unescape:
        return [target_string]

    data = get_data(children)
    data.update(values or {})

    if interpolate is None:
        interpolate = Interpolator().interpolate

    reconciler = Reconciler(
        interpolate=interpolate,
        values=data,
        language=language,
        options=options,
        components=children if isinstance(children, Mapping) else None,
        needs_html_handling=needs_html_handling,
        should_unescape=should_unescape,
        diagnostics=diagnostics,
    )

    # the extra wrapper keeps text in front of the first tag
    ast = parse(f"<0>{target_string}</0>")
    original = [] if is_absent(children) else children
    result = reconciler.map_ast([PlaceholderNode(children=original, dummy=True)], ast, as_list(original))
    if not result:
        return []
    nodes = get_children(result[0])
    logger.debug(f"Reconciled translation into {len(as_list(nodes))} node(s)")
    return [] if nodes is None else as_list(nodes)
