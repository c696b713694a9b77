"""Protocol definitions for Folio.

These protocols describe the seams where the loader and the image job can be
given alternative implementations, for example in tests.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RecordParser(Protocol):
    """Protocol for turning a source file into a raw record.

    Implementations handle one file format (front-matter documents, JSON,
    YAML).
    """

    @abstractmethod
    def can_parse(self, path: Path) -> bool:
        """Check if this parser can handle the given file."""
        ...

    @abstractmethod
    def parse(self, text: str, path: Path) -> tuple[dict[str, Any], str]:
        """Parse file content.

        Args:
            text: Raw file content.
            path: Path to the source file.

        Returns:
            Tuple of (raw record mapping, document body).

        Raises:
            ValidationError: If the content cannot be parsed.
        """
        ...


@runtime_checkable
class ImageConverter(Protocol):
    """Protocol for re-encoding a single image.

    Attributes:
        suffix: File suffix of the converted output (e.g. '.webp').
    """

    suffix: str

    @abstractmethod
    def convert(self, source: Path, dest: Path, quality: int) -> None:
        """Convert ``source`` into ``dest``.

        Raises:
            ConversionError: If the image cannot be read or written.
        """
        ...
