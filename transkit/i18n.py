"""
Minimal translation lookup backend.

Resources are nested dicts: {language: {namespace: {key: translation}}}. Keys are the
placeholder strings produced by nodes_to_string (or explicit i18n keys), looked up
verbatim without key or namespace separators.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from transkit.interpolator import Interpolator
from transkit.logger import get_logger

logger = get_logger(__name__)

# options of t() that are not interpolation values
_RESERVED_OPTIONS = {"ns", "context", "default_value", "interpolation", "lng"}


@dataclass
class I18nOptions:
    default_ns: str = "translation"
    fallback_language: Optional[str] = None
    interpolation: Dict[str, Any] = field(default_factory=dict)
    react: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Services:
    interpolator: Interpolator


class I18n:
    def __init__(
        self,
        resources: Optional[Dict[str, Dict[str, Dict[str, str]]]] = None,
        language: str = "en",
        default_ns: str = "translation",
        fallback_language: Optional[str] = None,
        interpolation: Optional[Dict[str, Any]] = None,
        react: Optional[Dict[str, Any]] = None,
    ):
        self.resources = resources or {}
        self.language = language
        self.options = I18nOptions(
            default_ns=default_ns,
            fallback_language=fallback_language,
            interpolation=dict(interpolation or {}),
            react=dict(react or {}),
        )
        interp_opts = self.options.interpolation
        self.services = Services(
            interpolator=Interpolator(
                prefix=interp_opts.get("prefix", "{{"),
                suffix=interp_opts.get("suffix", "}}"),
                format=interp_opts.get("format"),
                escape_value=interp_opts.get("escape_value", False),
                default_variables=interp_opts.get("default_variables"),
            )
        )

    def add_resource_bundle(self, language: str, ns: str, resources: Dict[str, str]):
        self.resources.setdefault(language, {}).setdefault(ns, {}).update(resources)

    def change_language(self, language: str):
        self.language = language

    def exists(self, key: str, **options: Any) -> bool:
        return self._find(key, options) is not None

    def t(self, key: Union[str, List[str]], **options: Any) -> str:
        """
        Looks up `key` and interpolates the result with the remaining options.

        Recognized options: ns (str or list), context, count (plural suffix _one/_other),
        default_value, lng, interpolation (prefix/suffix overrides); everything else is an
        interpolation value.
        """
        keys = [key] if isinstance(key, str) else list(key)
        value = None
        for k in keys:
            value = self._find(k, options)
            if value is not None:
                break

        if value is None:
            value = options.get("default_value")
            if value is None:
                value = keys[-1] if keys else ""
            logger.debug(f"Missing translation for key '{keys[0] if keys else ''}'")

        values = {k: v for k, v in options.items() if k not in _RESERVED_OPTIONS}
        return self.services.interpolator.interpolate(
            value,
            values,
            options.get("lng") or self.language,
            options.get("interpolation") or {},
        )

    def _namespaces(self, ns: Any) -> List[str]:
        ns = ns or self.options.default_ns
        return [ns] if isinstance(ns, str) else list(ns)

    def _languages(self, lng: Optional[str]) -> List[str]:
        languages = [lng or self.language]
        fallback = self.options.fallback_language
        if fallback and fallback not in languages:
            languages.append(fallback)
        return languages

    @staticmethod
    def _candidate_keys(key: str, context: Optional[str], count: Any) -> Iterable[str]:
        bases = [f"{key}_{context}", key] if context else [key]
        for base in bases:
            if count is not None:
                yield f"{base}_one" if count == 1 else f"{base}_other"
            yield base

    def _find(self, key: str, options: Dict[str, Any]) -> Optional[str]:
        candidates = list(self._candidate_keys(key, options.get("context"), options.get("count")))
        for language in self._languages(options.get("lng")):
            for ns in self._namespaces(options.get("ns")):
                bundle = self.resources.get(language, {}).get(ns, {})
                for candidate in candidates:
                    found = bundle.get(candidate)
                    if isinstance(found, str):
                        return found
        return None


_instance: Optional[I18n] = None


def set_i18n(instance: Optional[I18n]):
    global _instance
    _instance = instance


def get_i18n() -> Optional[I18n]:
    return _instance
