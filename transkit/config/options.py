import json
import os
import re
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from transkit.errors import OptionsError
from transkit.inline_tags import DEFAULT_KEEP_BASIC_HTML_NODES
from transkit.logger import get_logger
from transkit.unescape import unescape as default_unescape

logger = get_logger(__name__)

CONFIG_FILE = "transkit.json"


@dataclass(frozen=True)
class TransOptions:
    """
    Options consumed by the serializer, the reconciler and trans().

    Keys may be given in snake_case or in the camelCase used by i18next configs
    (transKeepBasicHtmlNodesFor, transWrapTextNodes, ...).
    """
    bind_i18n: str = "languageChanged"
    bind_i18n_store: str = ""
    trans_empty_node_value: str = ""
    trans_support_basic_html_nodes: bool = True
    trans_wrap_text_nodes: str = ""
    trans_keep_basic_html_nodes_for: Tuple[str, ...] = DEFAULT_KEEP_BASIC_HTML_NODES
    use_suspense: bool = True
    unescape: Callable[[str], str] = field(default=default_unescape, compare=False)
    hash_trans_key: Optional[Callable[[str], str]] = field(default=None, compare=False)
    default_trans_parent: Any = None

    def merged(self, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "TransOptions":
        """Returns a copy with `overrides` applied; unknown keys raise OptionsError."""
        changes = dict(overrides or {})
        changes.update(kwargs)
        if not changes:
            return self
        return replace(self, **_normalize(changes))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("unescape")
        data.pop("hash_trans_key")
        return data


_FIELD_NAMES = {f.name for f in fields(TransOptions)}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


def _normalize(changes: Mapping[str, Any]) -> Dict[str, Any]:
    normalized = {}
    for raw_key, value in changes.items():
        key = _snake_case(raw_key)
        if key not in _FIELD_NAMES:
            raise OptionsError(f"Unknown Trans option: {raw_key}")
        if key == "trans_keep_basic_html_nodes_for":
            if isinstance(value, str) or not all(isinstance(v, str) for v in (value or ())):
                raise OptionsError("transKeepBasicHtmlNodesFor must be a list of tag names")
            value = tuple(value or ())
        elif key in ("unescape", "hash_trans_key") and value is not None and not callable(value):
            raise OptionsError(f"{raw_key} must be callable")
        elif key == "trans_wrap_text_nodes" and value is None:
            value = ""
        normalized[key] = value
    return normalized


_defaults = TransOptions()


def get_defaults() -> TransOptions:
    return _defaults


def set_defaults(overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> TransOptions:
    global _defaults
    _defaults = _defaults.merged(overrides, **kwargs)
    return _defaults


def reset_defaults() -> TransOptions:
    global _defaults
    _defaults = TransOptions()
    return _defaults


def load_options(path: Optional[str] = None, base: Optional[TransOptions] = None) -> TransOptions:
    """
    Loads option overrides from a JSON settings file on top of `base` (the defaults).

    The file may hold the options at top level or under a "react" key, like an i18next
    init config. A missing file yields the base options; unreadable JSON is logged and
    ignored.
    """
    path = path or CONFIG_FILE
    base = base or get_defaults()
    if not os.path.exists(path):
        return base

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load options from {path}: {e}")
        return base

    if not isinstance(data, dict):
        logger.error(f"Options file {path} must contain a JSON object")
        return base
    if isinstance(data.get("react"), dict):
        data = data["react"]
    return base.merged(data)
