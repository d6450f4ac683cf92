"""Runtime configuration shared by the session, the web application and the CLI."""

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from projexport.exclusion_rules.name_rules import DEFAULT_EXCLUSION_NAMES

ENCODING_ERROR_HANDLERS = ("strict", "ignore", "replace")


@dataclass(frozen=True)
class ExporterConfig:
    """Settings for loading projects and writing exports.

    Attributes:
        output_dir: Directory receiving export files. A relative directory is
            resolved against the working directory at export time.
        default_exclusions: Names excluded when a load request gives none.
        encoding: Encoding used to read project files.
        encoding_errors: How undecodable bytes are handled: "strict" (the file
            is reported as unreadable), "ignore" or "replace".
        tokenizer_model: tiktoken model used to count tokens in exports, or None.

    Raises:
        ValueError: If ``encoding_errors`` is not a known handler.
        LookupError: If ``encoding`` is not available.

    Example:
        >>> str(ExporterConfig(encoding_errors="strict").output_dir)
        'exports'
    """

    output_dir: Path = Path("exports")
    default_exclusions: Tuple[str, ...] = field(default=DEFAULT_EXCLUSION_NAMES)
    encoding: str = "utf-8"
    encoding_errors: str = "replace"
    tokenizer_model: Optional[str] = None

    def __post_init__(self) -> None:
        if self.encoding_errors not in ENCODING_ERROR_HANDLERS:
            raise ValueError(
                f"Invalid error handler '{self.encoding_errors}'. "
                f"Must be one of: {', '.join(ENCODING_ERROR_HANDLERS)}"
            )
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise LookupError(f"Encoding '{self.encoding}' is not available") from e
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "default_exclusions", tuple(self.default_exclusions))
