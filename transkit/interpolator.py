import html
import re
from typing import Any, Callable, Dict, Mapping, Optional

from transkit.logger import get_logger

logger = get_logger(__name__)

FormatFn = Callable[[Any, str, Optional[str]], str]

_MISSING = object()


def _lookup(values: Mapping[str, Any], path: str) -> Any:
    if path in values:
        return values[path]
    current: Any = values
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return _MISSING
    return current


class Interpolator:
    """
    Replaces {{name}} and {{name, format}} in translated strings.

    Dotted names ({{user.name}}) look into nested mappings. Values that are not given are
    replaced with an empty string. `format` is called as format(value, format_name,
    language) for the "{{name, format}}" form.
    """

    def __init__(
        self,
        prefix: str = "{{",
        suffix: str = "}}",
        format: Optional[FormatFn] = None,
        escape_value: bool = False,
        default_variables: Optional[Dict[str, Any]] = None,
    ):
        self.prefix = prefix
        self.suffix = suffix
        self.format = format
        self.escape_value = escape_value
        self.default_variables = dict(default_variables or {})

    def _pattern(self, prefix: str, suffix: str) -> "re.Pattern":
        return re.compile(re.escape(prefix) + r"(.+?)" + re.escape(suffix))

    def interpolate(
        self,
        text: str,
        values: Optional[Mapping[str, Any]] = None,
        language: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        if not isinstance(text, str) or not text:
            return text

        options = options or {}
        prefix = options.get("prefix") or self.prefix
        suffix = options.get("suffix") or self.suffix
        escape_value = options.get("escape_value", options.get("escapeValue", self.escape_value))
        data: Dict[str, Any] = {**self.default_variables, **(values or {})}

        def replace_match(match: "re.Match") -> str:
            expression = match.group(1)
            name, _, fmt = expression.partition(",")
            name, fmt = name.strip(), fmt.strip()
            value = _lookup(data, name)
            if value is _MISSING or value is None:
                logger.debug(f"Missing interpolation value for '{name}'")
                return ""
            if fmt and self.format:
                value = self.format(value, fmt, language)
            value = value if isinstance(value, str) else str(value)
            return html.escape(value) if escape_value else value

        return self._pattern(prefix, suffix).sub(replace_match, text)
