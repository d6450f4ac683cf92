"""File system tree representation with name based exclusion.

This package builds the in-memory tree of a project directory, annotated with
relative paths and cumulative sizes, and renders it as a text outline.
"""

from .file_system_tree import FileSystemTree, ScanError, build_tree
from .tree_node import TreeNode

__all__ = ["FileSystemTree", "ScanError", "TreeNode", "build_tree"]
