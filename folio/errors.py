"""Error types for Folio.

Every error carries the file it concerns so the CLI can point the developer
at the offending source. All of them are fail-fast: nothing is retried.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class FolioError(Exception):
    """Error with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


class ValidationError(FolioError):
    """A content record failed its schema or could not be parsed.

    Attributes:
        errors: Field problems as (location, message) pairs.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
        errors: list[tuple[str, str]] | None = None,
    ):
        super().__init__(source_path, message, original_error)
        self.errors = errors or []


class ConversionError(FolioError):
    """An image could not be converted."""


class ConfigurationError(FolioError):
    """The site configuration is malformed."""


def format_pydantic_errors(details: list[dict[str, Any]]) -> list[tuple[str, str]]:
    """Flatten pydantic error details into (location, message) pairs.

    Args:
        details: Output of ``pydantic.ValidationError.errors()``.

    Returns:
        List of pairs such as ``("tags.1", "Input should be a valid string")``.
    """
    pairs = []
    for detail in details:
        loc = ".".join(str(part) for part in detail.get("loc", ())) or "<root>"
        pairs.append((loc, detail.get("msg", "invalid value")))
    return pairs
