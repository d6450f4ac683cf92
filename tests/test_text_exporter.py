"""Unit tests for the TextExporter class."""

from pathlib import Path

import pytest

from projexport.exceptions import EmptySelectionError
from projexport.exclusion_rules.name_rules import NameExclusionRules
from projexport.file_system_tree.file_system_tree import FileSystemTree
from projexport.selection import SelectionSet
from projexport.text_exporter import NOTHING_EXPORTED_NOTICE, SECTION_SEPARATOR, ExportResult, TextExporter


@pytest.fixture
def fs_tree(sample_project):
    return FileSystemTree(sample_project, NameExclusionRules(["node_modules"]))


def header(title):
    return f"{SECTION_SEPARATOR}\n{title}\n{SECTION_SEPARATOR}\n"


def test_export_text_layout(fs_tree):
    """The whole export text for a selected directory."""
    exporter = TextExporter(fs_tree, SelectionSet(fs_tree.subtree_paths("src")))
    expected = (
        header("PROJECT STRUCTURE AND SELECTION")
        + "└── [ ] 📁 proj (8 B)\n"
        + "    ├── [ ] 📄 README.md (7 B)\n"
        + "    └── [X] 📁 src (1 B)\n"
        + "        └── [X] 📄 a.js (1 B)"
        + "\n\n"
        + header("SELECTED FILES CONTENT")
        + "\n"
        + "--- File: src/a.js ---\nx\n\n"
        + "\n"
    )

    assert "".join(exporter.stream_export()) == expected
    assert exporter.file_count == 1


def test_files_follow_selection_order(fs_tree):
    exporter = TextExporter(fs_tree, SelectionSet(["src/a.js", "README.md"]))
    text = "".join(exporter.stream_contents())
    assert text.index("--- File: src/a.js ---") < text.index("--- File: README.md ---")
    assert exporter.file_count == 2


def test_directories_only_selection_adds_notice(sample_project):
    (sample_project / "empty").mkdir()
    fs_tree = FileSystemTree(sample_project, NameExclusionRules(["node_modules"]))
    exporter = TextExporter(fs_tree, SelectionSet(["empty"]))

    text = "".join(exporter.stream_contents())

    assert text == header("SELECTED FILES CONTENT") + "\n" + NOTHING_EXPORTED_NOTICE + "\n"
    assert exporter.file_count == 0


def test_stale_paths_are_skipped(fs_tree):
    exporter = TextExporter(fs_tree, SelectionSet(["ghost.txt", "README.md"]))
    text = "".join(exporter.stream_contents())
    assert "ghost.txt" not in text
    assert exporter.file_count == 1


def test_line_endings_are_preserved(sample_project, tmp_path):
    (sample_project / "win.txt").write_bytes(b"a\r\nb\r\n")
    fs_tree = FileSystemTree(sample_project, NameExclusionRules(["node_modules"]))

    result = TextExporter(fs_tree, SelectionSet(["win.txt"])).export(tmp_path / "out", "win_export.txt")

    assert b"--- File: win.txt ---\na\r\nb\r\n\n\n" in result.path.read_bytes()


def test_undecodable_bytes_are_replaced(sample_project):
    (sample_project / "latin1.txt").write_bytes(b"caf\xe9")
    fs_tree = FileSystemTree(sample_project, NameExclusionRules(["node_modules"]))

    text = "".join(TextExporter(fs_tree, SelectionSet(["latin1.txt"])).stream_contents())

    assert "--- File: latin1.txt ---\ncaf�\n\n" in text


def test_strict_decoding_reports_error_inline(sample_project, caplog):
    (sample_project / "latin1.txt").write_bytes(b"caf\xe9")
    fs_tree = FileSystemTree(sample_project, NameExclusionRules(["node_modules"]))
    exporter = TextExporter(fs_tree, SelectionSet(["latin1.txt", "README.md"]), errors="strict")

    text = "".join(exporter.stream_contents())

    assert "--- ERROR reading file: latin1.txt --- " in text
    assert "--- File: README.md ---\n# Demo\n\n" in text
    assert exporter.file_count == 1
    assert "Error reading file" in caplog.text


def test_export_writes_file(fs_tree, tmp_path):
    output_dir = tmp_path / "nested" / "exports"
    exporter = TextExporter(fs_tree, SelectionSet(["README.md"]))

    result = exporter.export(output_dir, "out.txt")

    assert result == ExportResult(
        path=output_dir.resolve() / "out.txt", directory=output_dir.resolve(), file_count=1, token_count=None
    )
    assert result.path.read_text(encoding="utf-8") == "".join(exporter.stream_export())


def test_export_overwrites_existing_file(fs_tree, tmp_path):
    (tmp_path / "out.txt").write_text("old")
    result = TextExporter(fs_tree, SelectionSet(["README.md"])).export(tmp_path, "out.txt")
    assert "old" not in result.path.read_text(encoding="utf-8")


def test_export_empty_selection(fs_tree, tmp_path):
    with pytest.raises(EmptySelectionError, match="No files selected"):
        TextExporter(fs_tree, SelectionSet()).export(tmp_path / "exports")
    assert not (tmp_path / "exports").exists()


def test_export_result_to_dict():
    result = ExportResult(path=Path("/out/a.txt"), directory=Path("/out"), file_count=2)
    assert result.to_dict() == {"path": str(Path("/out/a.txt")), "directory": str(Path("/out")), "fileCount": 2}

    counted = ExportResult(path=Path("/out/a.txt"), directory=Path("/out"), file_count=2, token_count=40)
    assert counted.to_dict()["tokenCount"] == 40
