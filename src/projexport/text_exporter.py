"""Serialization of a project selection into a single text artifact.

The export holds two sections: the whole tree outline with a selection marker
on every line, and the contents of every selected file in selection order.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from projexport.exceptions import EmptySelectionError, InvalidExportNameError, TokenizationError
from projexport.file_system_tree.file_system_tree import FileSystemTree
from projexport.formatting import generate_unique_filename, is_plain_file_name, safe_file_stem
from projexport.selection import SelectionSet
from projexport.token_counter import TokenCounter
from projexport.types import PathType

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "=" * 80
TREE_SECTION_TITLE = "PROJECT STRUCTURE AND SELECTION"
CONTENT_SECTION_TITLE = "SELECTED FILES CONTENT"
NOTHING_EXPORTED_NOTICE = (
    "No file contents were exported (either no files were selected, or selected paths were directories)."
)


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a successful export.

    Attributes:
        path: Absolute path of the written file.
        directory: Directory containing the written file.
        file_count: Number of files whose content was embedded.
        token_count: Tokens in the written text, or None when token counting is disabled.
    """

    path: Path
    directory: Path
    file_count: int
    token_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": str(self.path),
            "directory": str(self.directory),
            "fileCount": self.file_count,
        }
        if self.token_count is not None:
            data["tokenCount"] = self.token_count
        return data


class TextExporter:
    """Streams the export text for a tree and a selection snapshot.

    The exporter never modifies the tree or the selection. Files that cannot be
    read are reported inline in the output and logged; the rest of the selection
    is still exported.

    Attributes:
        fs_tree (FileSystemTree): The loaded project tree.
        selection (SelectionSet): The selected paths.
        encoding (str): Encoding used to read files.
        errors (str): Decode error handler used to read files.
        file_count (int): Files embedded so far by ``stream_export``.

    Example:
        >>> exporter = TextExporter(tree, selection)  # doctest: +SKIP
        >>> result = exporter.export("exports")  # doctest: +SKIP
        >>> result.file_count  # doctest: +SKIP
        3
    """

    def __init__(
        self,
        fs_tree: FileSystemTree,
        selection: SelectionSet,
        encoding: str = "utf-8",
        errors: str = "replace",
        tokenizer: Optional[TokenCounter] = None,
    ) -> None:
        self.fs_tree = fs_tree
        self.selection = selection
        self.encoding = encoding
        self.errors = errors
        self.tokenizer = tokenizer
        self.file_count = 0

    def _section_header(self, title: str) -> str:
        return f"{SECTION_SEPARATOR}\n{title}\n{SECTION_SEPARATOR}\n"

    def stream_tree(self) -> Iterator[str]:
        yield self._section_header(TREE_SECTION_TITLE)
        yield self.fs_tree.get_tree_representation(self.selection)
        yield "\n\n"

    def stream_contents(self) -> Iterator[str]:
        """Yield the content section, one file block at a time."""
        self.file_count = 0
        yield self._section_header(CONTENT_SECTION_TITLE) + "\n"

        for relative_path in self.selection:
            node = self.fs_tree.find_node(relative_path)
            if node is None or node.is_dir:
                continue

            file_path = self.fs_tree.root_path / relative_path
            try:
                with open(file_path, "r", encoding=self.encoding, errors=self.errors, newline="") as f:
                    content = f.read()
            except (OSError, UnicodeError) as e:
                logger.warning("Error reading file %s: %s", file_path, e)
                yield f"--- ERROR reading file: {relative_path} --- {e}\n\n"
                continue

            yield f"--- File: {relative_path} ---\n{content}\n\n"
            self.file_count += 1

        if self.file_count == 0:
            yield NOTHING_EXPORTED_NOTICE
        yield "\n"

    def stream_export(self) -> Iterator[str]:
        yield from self.stream_tree()
        yield from self.stream_contents()

    def export(self, output_dir: PathType, custom_name: Optional[str] = None) -> ExportResult:
        """Write the export text to a file.

        Args:
            output_dir: Directory for the export file; created if missing.
            custom_name: Plain file name to write inside ``output_dir``. When
                empty, a name is generated from the root directory name and the
                current time.

        Returns:
            ExportResult describing the written file.

        Raises:
            EmptySelectionError: If nothing is selected. No file is written.
            InvalidExportNameError: If ``custom_name`` is not a plain file name.
                No file is written.
            OSError: If the output directory or file cannot be written.
        """
        if len(self.selection) == 0:
            raise EmptySelectionError()
        if custom_name and not is_plain_file_name(custom_name):
            raise InvalidExportNameError(custom_name)

        text = "".join(self.stream_export())

        token_count = None
        if self.tokenizer is not None:
            try:
                token_count = self.tokenizer.count_tokens(text)
            except TokenizationError as e:
                logger.warning("%s", e)

        directory = Path(output_dir).resolve()
        directory.mkdir(parents=True, exist_ok=True)
        file_name = custom_name or generate_unique_filename(f"{safe_file_stem(self.fs_tree.root_name)}_export")
        output_path = directory / file_name
        with output_path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)

        logger.info("Exported %d file(s) to %s", self.file_count, output_path)
        return ExportResult(path=output_path, directory=directory, file_count=self.file_count, token_count=token_count)
