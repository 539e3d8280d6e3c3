from typing import Any, Dict, Optional

from transkit.nodes import InterpolationObject, as_list, get_children, has_children


def get_data(children: Any, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Collects the values of every interpolation object in the original tree.

    ["Hello ", {{name: "Ann"}}, <b>{{count: 3}}</b>] -> {"name": "Ann", "count": 3}
    Later objects overwrite earlier ones with the same key.
    """
    if data is None:
        data = {}
    for child in as_list(children):
        if isinstance(child, str):
            continue
        if has_children(child):
            get_data(get_children(child), data)
        elif isinstance(child, InterpolationObject):
            data.update(child.data())
    return data
