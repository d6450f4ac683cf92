"""Project export utilities.

This package lets a user browse a local directory in a browser, pick files and
folders, and export the selection (tree outline plus file contents) into a
single text file.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("projexport")
except PackageNotFoundError:
    __version__ = "unknown"
