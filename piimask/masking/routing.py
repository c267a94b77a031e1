"""Data-driven routing of field names to masking functions.

Each category masker declares a ``FieldRouter`` built from static lookup
tables. Keys are normalized to lower case before lookup, so ``"Phone"`` and
``"PHONE"`` route like ``"phone"``.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

Handler = Callable[[Any], Any]


def build_table(groups: Mapping[str, Iterable[str]]) -> Dict[str, str]:
    """Flatten ``{kind: [field names]}`` into ``{field name: kind}``."""
    return {name.lower(): kind for kind, names in groups.items() for name in names}


@dataclass(frozen=True)
class FieldRouter:
    """Routes field names to a masking kind and applies its handler.

    Attributes:
        exact: Normalized field name to kind
        contains: Ordered ``(substring, kind)`` rules tried after ``exact``
        default: Kind for unmatched names, or None to pass values through
        handlers: Kind to masking callable
    """

    exact: Mapping[str, str] = field(default_factory=dict)
    contains: Tuple[Tuple[str, str], ...] = ()
    default: Optional[str] = None
    handlers: Mapping[str, Handler] = field(default_factory=dict)

    def __post_init__(self) -> None:
        kinds = set(self.exact.values()) | {kind for _, kind in self.contains}
        if self.default is not None:
            kinds.add(self.default)
        missing = kinds - set(self.handlers)
        if missing:
            raise ValueError(f"No handler registered for kinds: {sorted(missing)}")

    def route(self, key: str) -> Optional[str]:
        """Return the kind a field name routes to (None means pass through)."""
        normalized = str(key).lower()

        kind = self.exact.get(normalized)
        if kind is not None:
            return kind

        for needle, candidate in self.contains:
            if needle in normalized:
                return candidate

        return self.default

    def apply(
        self,
        data: Mapping[str, Any],
        overrides: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Mask every non-empty value of ``data`` by its routed kind.

        Args:
            data: Field name to raw value
            overrides: Field name to kind, taking precedence over routing.
                Override kinds without a handler fall back to ``default``.

        Returns:
            A new dict with the same keys in the same order. Values routed
            to a handler are passed to it as text.
        """
        overrides = overrides or {}
        masked: Dict[str, Any] = {}

        for key, value in data.items():
            if not value:
                masked[key] = value
                continue

            kind = overrides.get(key)
            if kind is None:
                kind = self.route(key)
            elif kind not in self.handlers:
                kind = self.default

            # Maskers work on text; numbers from JSON and the like are coerced.
            masked[key] = value if kind is None else self.handlers[kind](str(value))

        return masked

    def with_handlers(self, **handlers: Handler) -> "FieldRouter":
        """Return a copy of this router with some handlers replaced."""
        return replace(self, handlers={**self.handlers, **handlers})
