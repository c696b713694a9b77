"""Source file parsers for Folio.

This module turns raw source files into (mapping, body) pairs ready for
schema validation. Each parser handles one kind of file, and the registry
picks one by file suffix so new formats can be added without touching the
loader.

Key classes:
- FrontmatterParser: Documents with a YAML header (.md, .mdx).
- JsonParser: One JSON object per file.
- YamlParser: One YAML mapping per file.
- ParserRegistry: Suffix-based lookup of parsers.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml

from .errors import ValidationError

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


def extract_frontmatter(text: str, path: Path) -> tuple[dict[str, Any], str]:
    """Extract the YAML front matter from a document.

    A document without a front-matter block yields an empty mapping and the
    whole text as body.

    Args:
        text: Raw file content.
        path: Path to the source file, used in error messages.

    Returns:
        Tuple of (front matter dict, remaining content).

    Raises:
        ValidationError: If the header is not valid YAML or not a mapping.
    """
    text = text.lstrip("\ufeff")
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except (yaml.YAMLError, ValueError) as exc:
        raise ValidationError(path, f"Invalid front matter: {exc}", exc) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError(path, "Front matter must be a mapping")
    return data, text[match.end() :]


class FrontmatterParser:
    """Parses documents that start with a ``---`` delimited YAML header."""

    SUPPORTED_EXTENSIONS = {".md", ".mdx"}

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() in self.SUPPORTED_EXTENSIONS

    def parse(self, text: str, path: Path) -> tuple[dict[str, Any], str]:
        return extract_frontmatter(text, path)


class JsonParser:
    """Parses data files holding exactly one JSON object."""

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def parse(self, text: str, path: Path) -> tuple[dict[str, Any], str]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(
                path, f"Invalid JSON on line {exc.lineno}: {exc.msg}", exc
            ) from exc
        if not isinstance(data, dict):
            raise ValidationError(path, "Data file must hold a single object")
        return data, ""


class YamlParser:
    """Parses data files holding exactly one YAML mapping."""

    SUPPORTED_EXTENSIONS = {".yaml", ".yml"}

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() in self.SUPPORTED_EXTENSIONS

    def parse(self, text: str, path: Path) -> tuple[dict[str, Any], str]:
        try:
            data = yaml.safe_load(text)
        except (yaml.YAMLError, ValueError) as exc:
            raise ValidationError(path, f"Invalid YAML: {exc}", exc) from exc
        if not isinstance(data, dict):
            raise ValidationError(path, "Data file must hold a single mapping")
        return data, ""


class ParserRegistry:
    """Registry for source parsers.

    Parsers are checked in registration order; the first one that accepts
    the path wins.
    """

    def __init__(self):
        """Initialize the registry with default parsers."""
        self._parsers: list = []
        self.register(FrontmatterParser())
        self.register(JsonParser())
        self.register(YamlParser())

    def register(self, parser) -> None:
        """Register a new parser.

        Args:
            parser: A RecordParser implementation.
        """
        self._parsers.append(parser)

    def get_parser(self, path: Path):
        """Get the parser for a file, or None when no parser accepts it."""
        for parser in self._parsers:
            if parser.can_parse(path):
                return parser
        return None


# Default parser registry instance
default_parser_registry = ParserRegistry()
