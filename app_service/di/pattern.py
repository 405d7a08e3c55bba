"""
Name Pattern Rule
=================

Decides whether a discovered class participates in the registry,
based on its simple name only.
"""
import re
from typing import Iterable, Pattern

from app_service.di.descriptor import ComponentKind
from app_service.di.errors import ScanConfigurationError

DEFAULT_PATTERN = r"^.+Case$|^.+Service$"


class NamePatternRule:
    """
    Regular expression matched against simple class names.

    Exactly one rule set is active per process; instances never change
    after construction.
    """

    def __init__(self, pattern: str) -> None:
        if not pattern or not pattern.strip():
            raise ScanConfigurationError("Name pattern must define at least one matching rule")
        try:
            self._regex: Pattern[str] = re.compile(pattern)
        except re.error as e:
            raise ScanConfigurationError(f"Malformed name pattern {pattern!r}: {e}") from e

    @classmethod
    def from_regex(cls, pattern: str) -> "NamePatternRule":
        return cls(pattern)

    @classmethod
    def from_suffixes(cls, suffixes: Iterable[str]) -> "NamePatternRule":
        """
        Build a rule matching any of the given name suffixes.

        Args:
            suffixes: Suffixes such as "Case" or "Service"

        Returns:
            Rule equivalent to ^.+(Suffix1|Suffix2)$
        """
        cleaned = sorted({suffix.strip() for suffix in suffixes if suffix and suffix.strip()})
        if not cleaned:
            raise ScanConfigurationError("At least one name suffix is required")
        alternation = "|".join(re.escape(suffix) for suffix in cleaned)
        return cls(f"^.+({alternation})$")

    @classmethod
    def default(cls) -> "NamePatternRule":
        return cls(DEFAULT_PATTERN)

    @property
    def pattern(self) -> str:
        return self._regex.pattern

    def matches(self, name: str) -> bool:
        """Check if a simple class name is discoverable under this rule."""
        return self._regex.fullmatch(name) is not None

    def classify(self, name: str) -> ComponentKind:
        return ComponentKind.for_name(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamePatternRule):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"NamePatternRule({self.pattern!r})"
