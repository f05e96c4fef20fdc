"""Value types shared by the resolution stages.

Every stage receives a :class:`Configuration` snapshot and hands back a new
one inside a :class:`StageResult`; snapshots are never changed in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from kserver.constants import LIBRARY, PRESENCE_ONLY_KEYS, Library

# Diagnostic codes
INVALID_BOOLEAN = 'invalid-boolean'
UNKNOWN_LIBRARY = 'unknown-library'
LIBRARY_DEFAULTED = 'library-defaulted'
UNSUPPORTED_OPTION = 'unsupported-option'


class DiagnosticLevel(str, Enum):
    INFO = 'info'
    WARNING = 'warning'


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal anomaly noticed while resolving options.

    Attributes:
        level: Severity of the anomaly.
        code: Stable machine readable identifier, e.g. "invalid-boolean".
        message: Human readable description.
        option: The option key the anomaly concerns, if any.
    """

    level: DiagnosticLevel
    code: str
    message: str
    option: str | None = None


@dataclass(frozen=True)
class Configuration:
    """Immutable snapshot of the generator property bag.

    Booleans are always stored as real ``bool`` values. The presence-only
    convention the templates rely on is applied by :meth:`template_context`.

    Attributes:
        values: Option key to normalized value.
        explicit: Keys the caller supplied rather than received as defaults.
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    explicit: frozenset[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))
        object.__setattr__(self, 'explicit', frozenset(self.explicit))

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    @property
    def library(self) -> Library | None:
        """The selected library, or None while it is still unresolved."""
        value = self.values.get(LIBRARY)
        if not value:
            return None
        return Library(value)

    def is_enabled(self, key: str) -> bool:
        """Whether a boolean option is on; a missing key counts as off."""
        return self.values.get(key) is True

    def updated(self, updates: Mapping[str, Any]) -> 'Configuration':
        """Return a copy with ``updates`` merged into the values."""
        return Configuration({**self.values, **updates}, self.explicit)

    def without(self, keys: Iterable[str]) -> 'Configuration':
        """Return a copy with ``keys`` removed from the values."""
        keys = set(keys)
        return Configuration(
            {k: v for k, v in self.values.items() if k not in keys}, self.explicit
        )

    def template_context(self) -> dict[str, Any]:
        """Build the variable namespace handed to the template renderer.

        Presence-only flags (interfaceOnly, useCoroutines, returnResponse) are
        emitted as ``True`` when enabled and left out entirely otherwise.
        """
        context = dict(self.values)
        for key in PRESENCE_ONLY_KEYS:
            if context.get(key) is not True:
                context.pop(key, None)
        return context


@dataclass(frozen=True)
class StageResult:
    """Output of a single resolution stage."""

    configuration: Configuration
    diagnostics: tuple[Diagnostic, ...] = ()
