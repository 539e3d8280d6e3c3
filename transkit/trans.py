from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from transkit.collector import get_data
from transkit.config.options import get_defaults
from transkit.diagnostics import NO_I18N_INSTANCE, Diagnostics, ensure_diagnostics
from transkit.i18n import I18n, get_i18n
from transkit.nodes import Element, is_absent
from transkit.reconciler import render_nodes
from transkit.serializer import nodes_to_string

_UNSET = object()

# keeps {{var}} untouched during lookup so the reconciler can fill it from the tree
NO_INTERPOLATION = {"prefix": "#$?", "suffix": "?$#"}

_LOOKUP_ONLY_OPTIONS = ("ns", "context", "default_value", "interpolation", "lng")


def _componentize(comp: Element) -> Callable[..., Any]:
    def Componentized(**_props: Any) -> Element:
        return comp

    return Componentized


def _wrap_self_closed_components(components: Any, translation: str) -> Any:
    """
    Components with their own children that the translation uses self-closed
    ("<Link/>") are wrapped so they render with those children intact.
    """
    if isinstance(components, Mapping):
        wrapped: Any = dict(components)
        items = list(wrapped.items())
    else:
        wrapped = list(components)
        items = [(str(i), comp) for i, comp in enumerate(wrapped)]

    for name, comp in items:
        if (
            not isinstance(comp, Element)
            or callable(comp.tag)
            or is_absent(comp.children)
            or (f"{name}/>" not in translation and f"{name} />" not in translation)
        ):
            continue
        replacement = Element(tag=_componentize(comp))
        if isinstance(wrapped, dict):
            wrapped[name] = replacement
        else:
            wrapped[int(name)] = replacement
    return wrapped


def trans(
    children: Any = None,
    *,
    count: Optional[int] = None,
    parent: Any = _UNSET,
    i18n_key: Optional[str] = None,
    context: Optional[str] = None,
    t_options: Optional[Dict[str, Any]] = None,
    values: Optional[Dict[str, Any]] = None,
    defaults: Optional[str] = None,
    components: Union[Mapping[str, Any], List[Any], None] = None,
    ns: Union[str, List[str], None] = None,
    i18n: Optional[I18n] = None,
    t: Optional[Callable[..., str]] = None,
    should_unescape: bool = False,
    diagnostics: Optional[Diagnostics] = None,
    **additional_props: Any,
) -> Any:
    """
    Translates a node tree.

    The tree is serialized into its placeholder string, which serves as lookup key and
    default value (unless `i18n_key` / `defaults` are given). The translation is then
    reconciled against the tree (or against `components`). With a parent (argument or
    the default_trans_parent option) the result is wrapped in Element(parent,
    additional_props, nodes); otherwise the node list is returned.

    Explicit `values` win over the interpolation values collected from the tree and
    over `interpolation.default_variables`. i18next lets default variables win instead.
    """
    diagnostics = ensure_diagnostics(diagnostics)
    i18n = i18n or get_i18n()

    if i18n is None:
        diagnostics.warn_once(NO_I18N_INSTANCE, "You will need to pass in an i18n instance by calling set_i18n()")
        return children

    t = t or i18n.t
    t_options = dict(t_options or {})
    if context:
        t_options["context"] = context

    options = get_defaults().merged(i18n.options.react)

    namespaces = ns or getattr(t, "ns", None) or i18n.options.default_ns
    if isinstance(namespaces, str):
        namespaces = [namespaces]
    namespaces = list(namespaces or ["translation"])

    node_as_string = nodes_to_string(children, options, diagnostics)
    default_value = defaults or node_as_string or options.trans_empty_node_value or i18n_key
    if i18n_key:
        key = i18n_key
    elif options.hash_trans_key:
        key = options.hash_trans_key(node_as_string or default_value)
    else:
        key = node_as_string or default_value

    default_variables = i18n.options.interpolation.get("default_variables")
    if values or default_variables:
        # the lookup runs with the regular delimiters here, so tree values must be passed too
        values = {**(default_variables or {}), **get_data(children), **(values or {})}

    if values:
        interpolation_override = t_options.get("interpolation")
    else:
        interpolation_override = {**(t_options.get("interpolation") or {}), **NO_INTERPOLATION}

    combined: Dict[str, Any] = dict(t_options)
    if count is not None:
        combined["count"] = count
    combined.update(values or {})
    if interpolation_override:
        combined["interpolation"] = interpolation_override
    combined["default_value"] = default_value
    combined["ns"] = namespaces

    translation = t(key, **combined) if key else default_value

    if components:
        components = _wrap_self_closed_components(components, translation or "")

    content = render_nodes(
        components or children,
        translation,
        interpolate=i18n.services.interpolator.interpolate,
        values={k: v for k, v in combined.items() if k not in _LOOKUP_ONLY_OPTIONS},
        language=i18n.language,
        options=options,
        should_unescape=should_unescape,
        diagnostics=diagnostics,
    )

    use_as_parent = parent if parent is not _UNSET else options.default_trans_parent
    if use_as_parent:
        return Element(tag=use_as_parent, props=additional_props, children=content)
    return content
