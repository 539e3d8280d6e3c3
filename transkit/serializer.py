from typing import Any, Optional, Sequence

from transkit.config.options import TransOptions, get_defaults
from transkit.diagnostics import (
    BAD_INTERPOLATION_USAGE,
    MALFORMED_INTERPOLATION,
    NULL_CHILD,
    Diagnostics,
    ensure_diagnostics,
)
from transkit.nodes import Element, InterpolationObject, as_list, is_absent, prop_count


def keep_array(options: TransOptions) -> Sequence[str]:
    if options.trans_support_basic_html_nodes and options.trans_keep_basic_html_nodes_for:
        return options.trans_keep_basic_html_nodes_for
    return ()


def nodes_to_string(
    children: Any,
    options: Optional[TransOptions] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> str:
    """
    Serializes a node tree into the placeholder string used as translation key.

    e.g. ["lorem ", <br/>, " ipsum ", {{count}}, " dolor ", <strong>bold</strong>]
    becomes "lorem <br/> ipsum {{count}} dolor <strong>bold</strong>"
    """
    if is_absent(children):
        return ""
    options = options or get_defaults()
    diagnostics = ensure_diagnostics(diagnostics)
    keep = keep_array(options)

    out = []
    for child_index, child in enumerate(as_list(children)):
        if isinstance(child, str):
            out.append(child)
        elif isinstance(child, Element):
            out.append(_element_to_string(child, child_index, keep, options, diagnostics))
        elif isinstance(child, InterpolationObject):
            keys = child.data_keys
            if len(keys) == 1:
                fmt = child.effective_format
                value = f"{keys[0]}, {fmt}" if fmt else keys[0]
                out.append("{{" + value + "}}")
            else:
                diagnostics.warn(
                    MALFORMED_INTERPOLATION,
                    "Trans: the passed in object contained more than one variable - the object "
                    "should look like {{ value, format }} where format is optional.",
                    child,
                )
        elif child is None:
            diagnostics.warn(NULL_CHILD, "Trans: the passed in value is invalid - seems you passed in a null child.")
        else:
            diagnostics.warn(
                BAD_INTERPOLATION_USAGE,
                "Trans: the passed in value is invalid - seems you passed in a variable like {number} - "
                "please pass in variables for interpolation as full objects like {{number}}.",
                child,
            )
    return "".join(out)


def _element_to_string(
    child: Element,
    child_index: int,
    keep: Sequence[str],
    options: TransOptions,
    diagnostics: Diagnostics,
) -> str:
    props_count = prop_count(child)
    should_keep = isinstance(child.tag, str) and child.tag in keep
    child_children = child.children

    if is_absent(child_children) and should_keep and props_count == 0:
        # lorem <br/> ipsum
        return f"<{child.tag}/>"
    if is_absent(child_children):
        # <hr className="test"/> -> <0></0>
        return f"<{child_index}></{child_index}>"
    if child.is_dynamic_list:
        # list items are generated at render time, "<0></0>" not "<0><0>a</0><1>b</1></0>"
        return f"<{child_index}></{child_index}>"
    if should_keep and props_count == 1 and isinstance(child_children, str):
        # dolor <strong>bold</strong> amet
        return f"<{child.tag}>{child_children}</{child.tag}>"

    content = nodes_to_string(child_children, options, diagnostics)
    return f"<{child_index}>{content}</{child_index}>"
