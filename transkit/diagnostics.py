from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Set

from transkit.logger import get_logger

logger = get_logger(__name__)

# Codes reported while serializing a node tree
MALFORMED_INTERPOLATION = "malformed-interpolation"
NULL_CHILD = "null-child"
BAD_INTERPOLATION_USAGE = "bad-interpolation-usage"
# Reported by the orchestrator
NO_I18N_INSTANCE = "no-i18n-instance"

_LOGGED_ONCE: Set[str] = set()


@dataclass
class Diagnostic:
    code: str
    message: str
    details: Any = None


@dataclass
class Diagnostics:
    """
    Non-fatal diagnostic channel.

    Everything the serializer or reconciler can recover from ends up here instead of
    being raised. Each entry is also written to the module logger at WARNING level, and
    an optional callback sees it as it arrives.
    """
    callback: Optional[Callable[[Diagnostic], None]] = None
    items: List[Diagnostic] = field(default_factory=list)
    _seen: Set[str] = field(default_factory=set, repr=False)

    def warn(self, code: str, message: str, details: Any = None, log: bool = True) -> Diagnostic:
        diagnostic = Diagnostic(code=code, message=message, details=details)
        self.items.append(diagnostic)
        if log:
            if details is None:
                logger.warning(message)
            else:
                logger.warning(f"{message} ({details!r})")
        if self.callback:
            self.callback(diagnostic)
        return diagnostic

    def warn_once(self, code: str, message: str, details: Any = None) -> Optional[Diagnostic]:
        """Records `message` once per sink and logs it once per process."""
        if message in self._seen:
            return None
        self._seen.add(message)
        first_time = message not in _LOGGED_ONCE
        _LOGGED_ONCE.add(message)
        return self.warn(code, message, details, log=first_time)

    @property
    def codes(self) -> List[str]:
        return [d.code for d in self.items]

    def __len__(self):
        return len(self.items)

    def __bool__(self):
        # An empty sink is still a sink
        return True


def ensure_diagnostics(diagnostics: Optional[Diagnostics]) -> Diagnostics:
    return diagnostics if diagnostics is not None else Diagnostics()
