"""Export session holding the loaded project tree and the current selection.

A session is the unit of state behind every operation: loading a project,
toggling selections, counting, previewing and exporting. Sessions are
independent of each other, and every method serializes access to the session
state so the object can be shared by the threads of a web server.
"""

import logging
import threading
from typing import Iterable, List, NamedTuple, Optional

from projexport.config import ExporterConfig
from projexport.exceptions import (
    EmptySelectionError,
    FileReadError,
    NodeNotFoundError,
    ProjectNotLoadedError,
)
from projexport.exclusion_rules.name_rules import NameExclusionRules
from projexport.file_system_tree.file_system_tree import FileSystemTree, ScanError
from projexport.file_system_tree.tree_node import TreeNode
from projexport.selection import SelectionSet
from projexport.text_exporter import ExportResult, TextExporter
from projexport.token_counter import TokenCounter
from projexport.types import PathType

logger = logging.getLogger(__name__)


class LoadResult(NamedTuple):
    """A freshly loaded tree together with the problems met while walking it."""

    tree: TreeNode
    scan_errors: List[ScanError]


class ExportSession:
    """One user's view of one project: its tree and the paths selected for export.

    Loading a project replaces the tree and clears the selection. Selection
    changes propagate eagerly: selecting or deselecting a directory adds or
    removes every path of its subtree, overriding whatever was chosen inside it
    before. Stale paths are never cleaned up proactively; counting and
    exporting ignore paths that do not resolve in the current tree.

    Attributes:
        config (ExporterConfig): Output directory, default exclusions and file
            reading settings.

    Example:
        >>> session = ExportSession()  # doctest: +SKIP
        >>> session.load("path/to/project", ["node_modules"])  # doctest: +SKIP
        >>> session.set_selected("src", True)  # doctest: +SKIP
        >>> session.export_to_text().file_count  # doctest: +SKIP
        4
    """

    def __init__(self, config: Optional[ExporterConfig] = None) -> None:
        """Initialize an empty session.

        Args:
            config: Session settings. Defaults to ``ExporterConfig()``.

        Raises:
            TokenizerNotAvailableError: If the config names a tokenizer model but
                tiktoken is not installed.
            ValueError: If the tokenizer model is unknown.
        """
        self.config = config if config is not None else ExporterConfig()
        self._tokenizer = TokenCounter(self.config.tokenizer_model) if self.config.tokenizer_model else None
        self._lock = threading.Lock()
        self._fs_tree: Optional[FileSystemTree] = None
        self._selection = SelectionSet()

    @property
    def is_loaded(self) -> bool:
        return self._fs_tree is not None

    @property
    def project_path(self) -> Optional[str]:
        with self._lock:
            return str(self._fs_tree.root_path) if self._fs_tree is not None else None

    @property
    def tree(self) -> Optional[TreeNode]:
        with self._lock:
            return self._fs_tree.get_tree() if self._fs_tree is not None else None

    @property
    def scan_errors(self) -> List[ScanError]:
        with self._lock:
            return self._fs_tree.scan_errors if self._fs_tree is not None else []

    @property
    def selected_paths(self) -> List[str]:
        """Snapshot of the selection, in insertion order."""
        with self._lock:
            return list(self._selection)

    def load(self, root_path: PathType, exclusion_names: Optional[Iterable[str]] = None) -> LoadResult:
        """Walk a project directory and make it the session's project.

        The previous tree is replaced and the selection is cleared, but only once
        the new tree has been built; a failed load leaves the session unchanged.

        Args:
            root_path: Directory to load.
            exclusion_names: Literal names to exclude. None means the configured
                default exclusions; an empty sequence excludes nothing.

        Returns:
            LoadResult with the root node of the new tree and the scan errors
            of that same walk.

        Raises:
            InvalidPathError: If the path does not exist or is not a directory.
        """
        if exclusion_names is None:
            exclusion_names = self.config.default_exclusions

        fs_tree = FileSystemTree(root_path, NameExclusionRules(exclusion_names))
        tree = fs_tree.get_tree()

        with self._lock:
            self._fs_tree = fs_tree
            self._selection.clear()

        logger.info(
            "Loaded %s: %d file(s), %d director(ies), %d scan error(s)",
            root_path,
            fs_tree.get_file_count(),
            fs_tree.get_directory_count(),
            len(fs_tree.scan_errors),
        )
        return LoadResult(tree, fs_tree.scan_errors)

    def set_selected(self, relative_path: str, selected: bool) -> None:
        """Select or deselect a path and everything below it.

        Unknown paths, and any call before a project is loaded, are ignored.

        Args:
            relative_path: Path of a node in the current tree; ``""`` is the root.
            selected: True to add the subtree to the selection, False to remove it.
        """
        with self._lock:
            if self._fs_tree is None:
                logger.debug("Ignoring selection of %r: no project loaded", relative_path)
                return
            paths = self._fs_tree.subtree_paths(relative_path)
            if not paths:
                logger.debug("Ignoring selection of unknown path %r", relative_path)
                return
            if selected:
                self._selection.add_all(paths)
            else:
                self._selection.discard_all(paths)

    def selected_file_count(self) -> int:
        """Count the selected paths that are files of the current tree."""
        with self._lock:
            if self._fs_tree is None:
                return 0
            count = 0
            for path in self._selection:
                node = self._fs_tree.find_node(path)
                if node is not None and not node.is_dir:
                    count += 1
            return count

    def get_file_content(self, relative_path: str) -> str:
        """Read the text of one file of the loaded project.

        The path is checked against the project root before anything is read.

        Args:
            relative_path: Path relative to the project root.

        Returns:
            The file's text.

        Raises:
            ProjectNotLoadedError: If no project is loaded.
            NodeNotFoundError: If the path is empty or does not exist.
            PathOutsideRootError: If the path resolves outside the project root.
            FileReadError: If the path is a directory or cannot be read.
        """
        with self._lock:
            fs_tree = self._fs_tree
        if fs_tree is None:
            raise ProjectNotLoadedError()
        if not relative_path:
            raise NodeNotFoundError(relative_path, "File path not provided")

        full_path = fs_tree.resolve_path(relative_path)
        if not full_path.exists():
            raise NodeNotFoundError(relative_path)
        if full_path.is_dir():
            raise FileReadError(relative_path, "Cannot display content of a directory")

        try:
            with open(full_path, "r", encoding=self.config.encoding, errors=self.config.encoding_errors) as f:
                return f.read()
        except (OSError, UnicodeError) as e:
            logger.warning("Error reading file content for %s: %s", full_path, e)
            raise FileReadError(relative_path, str(e)) from e

    def export_to_text(self, custom_file_name: Optional[str] = None) -> ExportResult:
        """Write the tree outline and the selected files' contents to one text file.

        Args:
            custom_file_name: Plain file name to use inside the output directory.
                When None or empty, a timestamped name is generated.

        Returns:
            ExportResult for the written file.

        Raises:
            EmptySelectionError: If nothing is selected. No file is written.
            InvalidExportNameError: If the custom name is not a plain file name.
            OSError: If the export file cannot be written.
        """
        with self._lock:
            if self._fs_tree is None or len(self._selection) == 0:
                raise EmptySelectionError()
            exporter = TextExporter(
                self._fs_tree,
                SelectionSet(self._selection),
                encoding=self.config.encoding,
                errors=self.config.encoding_errors,
                tokenizer=self._tokenizer,
            )
        return exporter.export(self.config.output_dir, custom_file_name)
