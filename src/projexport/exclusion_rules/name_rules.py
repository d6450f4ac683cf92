"""Literal name based exclusion rules."""

from typing import Iterable, List, Optional, Set

from .base_rules import BaseExclusionRules

# Artifacts most projects never want in an export.
DEFAULT_EXCLUSION_NAMES = (
    "node_modules",
    ".git",
    ".vscode",
    "package-lock.json",
    "yarn.lock",
    "build",
    "dist",
    "temp",
)


class NameExclusionRules(BaseExclusionRules):
    """Exclusion rules matching entries by their exact base name.

    Names are literal strings, not patterns: ``build`` excludes every file or
    directory called ``build`` at any depth, but not ``build.py`` or ``rebuild``.
    Matching is case-sensitive.

    Example:
        >>> rules = NameExclusionRules(["dist", ".git"])
        >>> rules.exclude(".git")
        True
        >>> rules.exclude("dist.txt")
        False
        >>> rules.add_rule("temp")
        >>> rules
        NameExclusionRules(['dist', '.git', 'temp'])
    """

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self._names: List[str] = []
        self._name_set: Set[str] = set()
        for name in names or ():
            self.add_rule(name)

    def exclude(self, name: str) -> bool:
        return name in self._name_set

    def add_rule(self, rule: str) -> None:
        """Add a name to exclude. Empty names and duplicates are ignored."""
        if rule and rule not in self._name_set:
            self._names.append(rule)
            self._name_set.add(rule)

    def __repr__(self) -> str:
        return f"NameExclusionRules({self._names!r})"
