"""Node representation for file system elements in the tree."""

from typing import Any, Dict, Optional

from anytree import Node

from projexport.formatting import format_file_size
from projexport.types import NodeType


class TreeNode(Node):  # type: ignore
    """Node class representing a file or directory in a project tree.

    Extends anytree.Node with the project-relative path, the entry kind and its
    size. Inherits tree traversal and manipulation capabilities from
    anytree.Node. anytree already defines ``path`` and ``size`` (the ancestor
    tuple and the subtree node count), so the project path and the byte count
    are stored as ``relative_path`` and ``byte_size``.

    Attributes:
        name (str): The base name of the file or directory.
        relative_path (str): Path relative to the project root using forward
            slashes. The root node's path is the empty string.
        is_dir (bool): True if this node represents a directory, False for files.
        byte_size (int): Byte length of a file, or the sum of the children's sizes for
            a directory.

    Example:
        >>> root = TreeNode("proj", is_dir=True)
        >>> child = TreeNode("a.js", parent=root, relative_path="a.js", size=1536)
        >>> root.relative_path
        ''
        >>> child.formatted_size
        '1.5 KB'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["TreeNode"] = None,
        relative_path: str = "",
        is_dir: bool = False,
        size: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.relative_path = relative_path
        self.is_dir = is_dir
        self.byte_size = size

    @property
    def node_type(self) -> NodeType:
        return NodeType.DIRECTORY if self.is_dir else NodeType.FILE

    @property
    def formatted_size(self) -> str:
        return format_file_size(self.byte_size)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node and its subtree into JSON-compatible dictionaries.

        Returns:
            A mapping with ``name``, ``path``, ``type``, ``size`` and
            ``formattedSize`` keys, plus ``children`` for directories.
        """
        data: Dict[str, Any] = {
            "name": self.name,
            "path": self.relative_path,
            "type": self.node_type.value,
            "size": self.byte_size,
            "formattedSize": self.formatted_size,
        }
        if self.is_dir:
            data["children"] = [child.to_dict() for child in self.children]
        return data
