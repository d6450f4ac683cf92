from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeType(str, Enum):
    """Kind of entry represented by a tree node.

    The string values are the ones used in the JSON form of the tree.

    Attributes:
        FILE: Regular file
        DIRECTORY: Directory
    """

    FILE = "file"
    DIRECTORY = "directory"
