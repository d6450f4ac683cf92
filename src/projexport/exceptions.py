class ProjectExportError(Exception):
    """Base class for errors reported by project loading, selection and export.

    Every error raised by a session operation derives from this class, so callers
    (the web layer in particular) can report any of them with a single handler.
    """

    pass


class InvalidPathError(ProjectExportError):
    """
    Exception raised when a project root does not exist or is not a directory.

    Example:
        >>> error = InvalidPathError("Path does not exist: /missing")
        >>> str(error)
        'Path does not exist: /missing'
    """

    pass


class ProjectNotLoadedError(ProjectExportError):
    """Exception raised when an operation needs a loaded project and none is loaded."""

    def __init__(self, message: str = "No project has been loaded.") -> None:
        super().__init__(message)


class PathOutsideRootError(ProjectExportError):
    """
    Exception raised when a relative path resolves outside the loaded project root.

    Attributes:
        relative_path (str): The path as it was requested.

    Example:
        >>> error = PathOutsideRootError("../secret.txt")
        >>> str(error)
        'Access denied: path outside project directory: ../secret.txt'
    """

    def __init__(self, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(f"Access denied: path outside project directory: {relative_path}")


class NodeNotFoundError(ProjectExportError):
    """
    Exception raised when an operation that must return a value references a path
    that is absent from the project.

    Attributes:
        relative_path (str): The path that could not be found.
    """

    def __init__(self, relative_path: str, message: str = "File does not exist") -> None:
        self.relative_path = relative_path
        super().__init__(f"{message}: {relative_path}" if relative_path else message)


class FileReadError(ProjectExportError):
    """
    Exception raised when the content of a single file cannot be read.

    Attributes:
        relative_path (str): Path of the file relative to the project root.
        reason (str): Description of the underlying failure.

    Example:
        >>> error = FileReadError("src/a.js", "Permission denied")
        >>> str(error)
        'Error reading file src/a.js: Permission denied'
    """

    def __init__(self, relative_path: str, reason: str) -> None:
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"Error reading file {relative_path}: {reason}")


class EmptySelectionError(ProjectExportError):
    """Exception raised when an export is attempted with nothing selected."""

    def __init__(self, message: str = "No files selected") -> None:
        super().__init__(message)


class InvalidExportNameError(ProjectExportError):
    """
    Exception raised when a custom export file name is not a plain file name.

    Export files are always written directly inside the output directory, so
    names with path separators, ``.``/``..`` or null bytes are refused.

    Example:
        >>> str(InvalidExportNameError("../out.txt"))
        'Invalid export file name: ../out.txt'
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid export file name: {name}")


class TokenizerNotAvailableError(ProjectExportError):
    """
    Exception raised when token counting is requested but the tokenizer package is missing.

    The `tiktoken` package is an optional dependency installed through the
    'token_counting' extra.

    Attributes:
        message (str): Detailed error message including installation instructions.

    Example:
        >>> error = TokenizerNotAvailableError()
        >>> str(error).startswith('Tokenizer (tiktoken) is not installed')
        True
    """

    def __init__(self, message: str = "Tokenizer (tiktoken) is not installed.") -> None:
        self.message = (
            f"{message} To enable token counting, install projexport with the 'token_counting' "
            "extra: 'pip install projexport[token_counting]'."
        )
        super().__init__(self.message)


class TokenizationError(ProjectExportError):
    """Exception raised when the tokenizer is available but fails to process text."""

    pass
