"""Unit tests for the TreeNode class."""

from anytree import PreOrderIter

from projexport.file_system_tree.tree_node import TreeNode
from projexport.types import NodeType


def test_tree_node_defaults():
    node = TreeNode("root")
    assert node.name == "root"
    assert node.relative_path == ""
    assert node.is_dir is False
    assert node.byte_size == 0
    assert node.node_type == NodeType.FILE


def test_tree_node_hierarchy():
    root = TreeNode("root", is_dir=True)
    src = TreeNode("src", parent=root, relative_path="src", is_dir=True)
    leaf = TreeNode("a.js", parent=src, relative_path="src/a.js", size=1)

    assert leaf.parent is src
    assert src.children == (leaf,)
    assert [node.relative_path for node in PreOrderIter(root)] == ["", "src", "src/a.js"]
    assert src.node_type == NodeType.DIRECTORY


def test_tree_node_formatted_size():
    assert TreeNode("big.bin", size=1536).formatted_size == "1.5 KB"
    assert TreeNode("empty.txt").formatted_size == "0 B"


def test_tree_node_to_dict():
    root = TreeNode("proj", is_dir=True, size=1024)
    TreeNode("a.js", parent=root, relative_path="a.js", size=1024)

    assert root.to_dict() == {
        "name": "proj",
        "path": "",
        "type": "directory",
        "size": 1024,
        "formattedSize": "1 KB",
        "children": [
            {"name": "a.js", "path": "a.js", "type": "file", "size": 1024, "formattedSize": "1 KB"},
        ],
    }


def test_empty_directory_to_dict_has_children():
    assert TreeNode("empty", is_dir=True).to_dict()["children"] == []
