"""Set of selected project paths."""

from typing import Dict, Iterable, Iterator


class SelectionSet:
    """Insertion-ordered set of relative paths marked for export.

    The set stores every selected path explicitly. A directory being present
    says nothing about its children: selecting a directory is done by adding
    the directory and all of its descendants at once (see
    ``ExportSession.set_selected``).

    Example:
        >>> selection = SelectionSet()
        >>> selection.add_all(["src", "src/a.js"])
        >>> "src/a.js" in selection
        True
        >>> selection.discard_all(["src/a.js"])
        >>> list(selection)
        ['src']
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: Dict[str, None] = {}
        self.add_all(paths)

    def add_all(self, paths: Iterable[str]) -> None:
        for path in paths:
            self._paths[path] = None

    def discard_all(self, paths: Iterable[str]) -> None:
        for path in paths:
            self._paths.pop(path, None)

    def clear(self) -> None:
        self._paths.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"SelectionSet({list(self._paths)!r})"
