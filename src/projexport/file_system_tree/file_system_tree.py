"""Project tree construction with name based exclusion rules.

This module provides the FileSystemTree class, which walks a project directory
once and keeps the resulting tree of TreeNode objects together with a path
index, and the build_tree convenience function.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Container, Dict, Iterable, Iterator, List, NamedTuple, Optional, Set

from anytree import PreOrderIter

from projexport.exceptions import InvalidPathError, NodeNotFoundError, PathOutsideRootError
from projexport.exclusion_rules.base_rules import BaseExclusionRules
from projexport.exclusion_rules.name_rules import NameExclusionRules
from projexport.file_system_tree.file_identifier import FileIdentifier
from projexport.file_system_tree.tree_node import TreeNode
from projexport.types import PathType

logger = logging.getLogger(__name__)

DIRECTORY_ICON = "📁"
FILE_ICON = "📄"


def is_utf8_name(name: str) -> bool:
    """Tell whether a name read from the filesystem decodes as UTF-8."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def replace_undecodable(name: str) -> str:
    """Replace the undecodable bytes of a filesystem name with U+FFFD."""
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class ScanError(NamedTuple):
    """A non-fatal problem met while walking the project."""

    relative_path: str
    message: str


class FileSystemTree:
    """A tree representation of a project directory with support for exclusion rules.

    The tree is built lazily on first access and can be refreshed to reflect
    filesystem changes. Every node carries its path relative to the root, with
    forward slashes on every platform, and its size in bytes (the sum of the
    descendants' sizes for directories).

    Exclusion:
        Exclusion rules are consulted for every entry while its parent directory
        is enumerated, so an excluded directory is never descended into. The root
        itself is never excluded, whatever its name.

    Error Handling:
        A directory that cannot be listed appears with no children, and an entry
        that cannot be stat-ed is left out. Both are logged and recorded in
        ``scan_errors``; the walk continues with the remaining entries.
        Entries whose names are not valid UTF-8 are left out and reported the
        same way.

    Symbolic Links:
        Links are followed. A link to a directory that is already being walked
        (one of its own ancestors) is skipped so that the walk terminates.

    Attributes:
        root_path (Path): The root directory, as given.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding entries.

    Example:
        >>> tree = FileSystemTree(".", NameExclusionRules([".git"]))  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        └── [ ] 📁 project (1.2 KB)
            ├── [ ] 📁 src (1 KB)
            │   └── [ ] 📄 main.py (1 KB)
            └── [ ] 📄 README.md (200 B)
    """

    def __init__(self, root_path: PathType, exclusion_rules: Optional[BaseExclusionRules] = None) -> None:
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self._tree: Optional[TreeNode] = None
        self._index: Dict[str, TreeNode] = {}
        self._scan_errors: List[ScanError] = []

    @property
    def root_name(self) -> str:
        """Display name of the root: the base name of the resolved root path."""
        resolved = self.root_path.resolve()
        return resolved.name or str(resolved)

    @property
    def scan_errors(self) -> List[ScanError]:
        return list(self._scan_errors)

    def get_tree(self) -> TreeNode:
        """Get the root node of the tree, building it on first access.

        Returns:
            The root node.

        Raises:
            InvalidPathError: If the root path doesn't exist or isn't a directory.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        if not self.root_path.exists():
            raise InvalidPathError(f"Path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise InvalidPathError(f"Provided path is not a directory: {self.root_path}")

        self._scan_errors = []
        root = self._create_node(self.root_path, "", set())
        if root is None:
            raise InvalidPathError(f"Cannot access directory: {self.root_path}")

        root.name = replace_undecodable(self.root_name)
        self._tree = root
        self._index = {node.relative_path: node for node in PreOrderIter(root)}

    def _report(self, relative_path: str, message: str) -> None:
        message = replace_undecodable(message)
        logger.warning(message)
        self._scan_errors.append(ScanError(relative_path, message))

    def _create_node(
        self,
        path: Path,
        relative_path: str,
        active_directories: Set[FileIdentifier],
        parent: Optional[TreeNode] = None,
    ) -> Optional[TreeNode]:
        """Recursively create the node for a path and its children."""
        try:
            stat_result = path.stat()
        except OSError as e:
            self._report(relative_path, f"Cannot access {path}: {e.strerror or e}")
            return None

        if stat.S_ISREG(stat_result.st_mode):
            return TreeNode(path.name, parent=parent, relative_path=relative_path, size=stat_result.st_size)

        if not stat.S_ISDIR(stat_result.st_mode):
            # Sockets, FIFOs and devices have no exportable content
            logger.debug("Skipping special file %s", path)
            return None

        file_id = FileIdentifier.from_stat(stat_result)
        if file_id in active_directories:
            self._report(relative_path, f"Symlink loop detected at {path}")
            return None

        node = TreeNode(path.name, parent=parent, relative_path=relative_path, is_dir=True)

        try:
            entries = sorted(os.listdir(path))
        except OSError as e:
            self._report(relative_path, f"Error reading directory {path}: {e.strerror or e}")
            return node

        active_directories.add(file_id)
        try:
            for entry in entries:
                if self.exclusion_rules is not None and self.exclusion_rules.exclude(entry):
                    continue
                child_relative_path = f"{relative_path}/{entry}" if relative_path else entry
                if not is_utf8_name(entry):
                    display_path = replace_undecodable(child_relative_path)
                    self._report(display_path, f"Skipping {display_path}: name is not valid UTF-8")
                    continue
                child = self._create_node(path / entry, child_relative_path, active_directories, parent=node)
                if child is not None:
                    node.byte_size += child.byte_size
        finally:
            active_directories.discard(file_id)

        return node

    def find_node(self, relative_path: str) -> Optional[TreeNode]:
        """Look up a node by its path relative to the root.

        Args:
            relative_path: Forward-slash relative path; ``""`` is the root.

        Returns:
            The matching node, or None if the path is not part of the tree.
        """
        self.get_tree()
        return self._index.get(relative_path)

    def subtree_paths(self, relative_path: str) -> List[str]:
        """Return the paths of a node and all of its descendants, in pre-order.

        Returns an empty list if the path is not part of the tree.
        """
        node = self.find_node(relative_path)
        if node is None:
            return []
        return [descendant.relative_path for descendant in PreOrderIter(node)]

    def iterate_files(self) -> Iterator[TreeNode]:
        """Yield every file node of the tree in pre-order."""
        yield from PreOrderIter(self.get_tree(), filter_=lambda node: not node.is_dir)

    def get_file_count(self) -> int:
        return sum(1 for _ in self.iterate_files())

    def get_directory_count(self) -> int:
        """Get the number of directories in the tree, excluding the root."""
        return sum(1 for node in PreOrderIter(self.get_tree()) if node.is_dir) - 1

    def resolve_path(self, relative_path: str) -> Path:
        """Turn a relative path into an absolute one, refusing anything outside the root.

        Both ``..`` components and symbolic links are resolved before the
        containment check.

        Args:
            relative_path: Path relative to the root, with either separator.

        Returns:
            The resolved absolute path.

        Raises:
            PathOutsideRootError: If the resolved path is not inside the root.
            NodeNotFoundError: If the path cannot name a file at all.
        """
        root = self.root_path.resolve()
        try:
            candidate = (root / relative_path).resolve()
        except ValueError as e:
            # Null bytes can never name a file
            raise NodeNotFoundError(relative_path) from e
        if candidate != root and root not in candidate.parents:
            raise PathOutsideRootError(relative_path)
        return candidate

    def stream_tree_representation(self, selected_paths: Container[str] = ()) -> Iterator[str]:
        """Generate the tree outline one line at a time.

        Each line carries a ``[X]``/``[ ]`` marker telling whether that exact
        path is in ``selected_paths``, a type icon, the name and the formatted
        size.

        Args:
            selected_paths: Paths to mark as selected.

        Yields:
            Lines of the outline, without trailing newlines.

        Example:
            >>> tree = FileSystemTree("proj")  # doctest: +SKIP
            >>> for line in tree.stream_tree_representation({"src/a.js"}):  # doctest: +SKIP
            ...     print(line)
            └── [ ] 📁 proj (1 B)
                └── [ ] 📁 src (1 B)
                    └── [X] 📄 a.js (1 B)
        """

        def write_node(node: TreeNode, prefix: str, is_last: bool) -> Iterator[str]:
            connector = "└── " if is_last else "├── "
            marker = "[X] " if node.relative_path in selected_paths else "[ ] "
            icon = DIRECTORY_ICON if node.is_dir else FILE_ICON
            yield f"{prefix}{connector}{marker}{icon} {node.name} ({node.formatted_size})"

            child_prefix = prefix + ("    " if is_last else "│   ")
            children = node.children
            for i, child in enumerate(children):
                yield from write_node(child, child_prefix, i == len(children) - 1)

        yield from write_node(self.get_tree(), "", True)

    def get_tree_representation(self, selected_paths: Container[str] = ()) -> str:
        return "\n".join(self.stream_tree_representation(selected_paths))

    def refresh(self) -> None:
        """Discard the current tree and walk the filesystem again."""
        self._tree = None
        self._index = {}
        self._build_tree()


def build_tree(root_path: PathType, exclusion_names: Iterable[str] = ()) -> Optional[TreeNode]:
    """Walk a directory and return its tree, skipping entries with excluded names.

    Args:
        root_path: Directory to walk.
        exclusion_names: Literal base names to leave out, together with their subtrees.

    Returns:
        The root node, or None if ``root_path`` is not an accessible directory.
    """
    try:
        return FileSystemTree(root_path, NameExclusionRules(exclusion_names)).get_tree()
    except InvalidPathError as e:
        logger.warning("%s", e)
        return None
