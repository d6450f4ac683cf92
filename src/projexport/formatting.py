"""Human-readable sizes and export file names."""

import re
from datetime import datetime, timezone
from typing import Optional

SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """Format a byte count using binary prefixes.

    The value is divided by the largest power of 1024 not exceeding it (GB at
    most), rounded to two decimals, and trailing zeros are dropped.

    Args:
        size: Number of bytes.

    Returns:
        A string such as ``"1.5 KB"``.

    Example:
        >>> format_file_size(0)
        '0 B'
        >>> format_file_size(1536)
        '1.5 KB'
        >>> format_file_size(1048576)
        '1 MB'
    """
    if size <= 0:
        return "0 B"

    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1

    value = f"{size / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"


def generate_unique_filename(base_name: str = "export", now: Optional[datetime] = None) -> str:
    """Build a timestamped ``.txt`` file name that is safe on every filesystem.

    Args:
        base_name: Prefix of the file name.
        now: Moment to stamp. Defaults to the current UTC time.

    Returns:
        ``<base_name>_<YYYY-MM-DD_HH-MM-SS>.txt``

    Example:
        >>> generate_unique_filename("demo_export", datetime(2024, 5, 1, 13, 4, 5, 999))
        'demo_export_2024-05-01_13-04-05.txt'
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return f"{base_name}_{now.strftime('%Y-%m-%d_%H-%M-%S')}.txt"


def is_plain_file_name(name: str) -> bool:
    """Tell whether ``name`` names a file directly inside a directory.

    Example:
        >>> is_plain_file_name("context.txt")
        True
        >>> is_plain_file_name("../context.txt")
        False
    """
    if name in ("", ".", ".."):
        return False
    return not any(char in name for char in ("/", "\\", "\x00"))


def safe_file_stem(name: str, fallback: str = "project") -> str:
    """Turn a display name into something usable as a file name prefix.

    Path separators and drive colons become underscores; a name left empty
    (the filesystem root, for instance) is replaced by ``fallback``.

    Example:
        >>> safe_file_stem("/")
        'project'
        >>> safe_file_stem("my-app")
        'my-app'
    """
    stem = re.sub(r"[\\/:\x00]", "_", name).strip("_.")
    return stem or fallback
