"""Identity of a filesystem object by device and inode."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class FileIdentifier:
    """Device/inode pair that uniquely identifies a directory on a host.

    Used while walking a tree that follows symbolic links: a directory whose
    identifier is already on the current descent path is a link back to one of
    its own ancestors.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Example:
        >>> FileIdentifier(1, 42) == FileIdentifier(1, 42)
        True
        >>> len({FileIdentifier(1, 42), FileIdentifier(1, 42), FileIdentifier(2, 42)})
        2
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        return cls(stat_result.st_dev, stat_result.st_ino)
