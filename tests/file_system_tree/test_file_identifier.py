"""Unit tests for the FileIdentifier class."""

import os

from projexport.file_system_tree.file_identifier import FileIdentifier


def test_file_identifier_equality():
    assert FileIdentifier(1, 2) == FileIdentifier(1, 2)
    assert FileIdentifier(1, 2) != FileIdentifier(1, 3)
    assert FileIdentifier(1, 2) != FileIdentifier(2, 2)


def test_file_identifier_hash_in_set():
    ids = {FileIdentifier(1, 2), FileIdentifier(1, 2), FileIdentifier(3, 4)}
    assert len(ids) == 2


def test_file_identifier_from_stat(tmp_path):
    stat_result = os.stat(tmp_path)
    file_id = FileIdentifier.from_stat(stat_result)
    assert file_id.device_id == stat_result.st_dev
    assert file_id.inode_number == stat_result.st_ino
    assert file_id == FileIdentifier.from_stat(os.stat(tmp_path))
