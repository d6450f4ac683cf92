from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Rules are consulted by the tree builder while it enumerates a directory: an
    entry for which `exclude` returns True is skipped together with its whole
    subtree. The project root itself is never checked.

    Example:
        >>> from projexport.exclusion_rules.name_rules import NameExclusionRules
        >>> rules = NameExclusionRules(["node_modules"])
        >>> rules.exclude("node_modules")
        True
        >>> rules.exclude("src")
        False
    """

    @abstractmethod
    def exclude(self, name: str) -> bool:
        """
        Determine if a directory entry should be excluded.

        Args:
            name (str): The base name of the file or directory being enumerated.

        Returns:
            bool: True if the entry should be excluded, False if it should be included.
        """
        pass
