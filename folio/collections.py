"""Content collections for Folio.

This module declares the schema registry and loads collections from disk.
A collection is a named set of records sharing one schema and one source
pattern. Loading is parse-or-reject: every file either becomes a validated
Entry or the whole load raises a ValidationError.

Key classes:
- CollectionDefinition: Schema plus source location for one category.
- Entry: One validated record with its identity and body.
- EntryCollection: Read-only sequence of entries with helpers.
- CollectionLoader: Discovers, parses and validates files.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError, format_pydantic_errors
from .parsers import ParserRegistry, default_parser_registry
from .schemas import BlogPost, Project, WorkEntry
from .utils import entry_id, is_internal_path

if TYPE_CHECKING:
    from .protocols import RecordParser


@dataclass(frozen=True)
class CollectionDefinition:
    """Declares one content category.

    Attributes:
        name: Collection name (e.g. 'blog').
        schema: Pydantic model every record must satisfy.
        base: Directory holding the source files, relative to the project root.
        pattern: Glob pattern, relative to ``base``.
    """

    name: str
    schema: type[BaseModel]
    base: str
    pattern: str


COLLECTIONS: Mapping[str, CollectionDefinition] = MappingProxyType(
    {
        "blog": CollectionDefinition("blog", BlogPost, "src/data/blog", "**/*.mdx"),
        "projects": CollectionDefinition(
            "projects", Project, "src/data/projects", "**/*.json"
        ),
        "work": CollectionDefinition("work", WorkEntry, "src/data/work", "**/*.json"),
    }
)


def get_collection(
    name: str, registry: Mapping[str, CollectionDefinition] = COLLECTIONS
) -> CollectionDefinition:
    """Look up a collection definition by name.

    Raises:
        KeyError: If no collection with that name is registered.
    """
    try:
        return registry[name]
    except KeyError:
        known = ", ".join(sorted(registry))
        raise KeyError(f"Unknown collection '{name}' (known: {known})") from None


@dataclass(frozen=True)
class Entry:
    """A validated content record.

    Attributes:
        id: Slugified path relative to the collection base, without extension.
        collection: Name of the owning collection.
        path: Path to the source file.
        data: The validated record.
        body: Document body after the front matter (empty for data files).
    """

    id: str
    collection: str
    path: Path
    data: BaseModel
    body: str = ""


class EntryCollection(Sequence[Entry]):
    """Lightweight helper for working with the entries of one collection."""

    def __init__(self, entries: Iterable[Entry]):
        self._entries = list(entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, item):
        return self._entries[item]

    def get(self, id: str) -> Entry | None:
        for entry in self._entries:
            if entry.id == id:
                return entry
        return None

    def with_tag(self, tag: str) -> EntryCollection:
        return EntryCollection(
            e for e in self._entries if tag in (getattr(e.data, "tags", None) or [])
        )

    def sorted_by_date(self, reverse: bool = True) -> EntryCollection:
        """Sort entries by their ``date`` field, newest first by default.

        Entries with equal dates keep a stable order by id. Only collections
        whose records carry a calendar ``date`` can be sorted.

        Raises:
            TypeError: If an entry has no calendar ``date``.
        """
        for entry in self._entries:
            if not isinstance(getattr(entry.data, "date", None), date):
                raise TypeError(
                    f"Cannot sort '{entry.collection}' entries by date: "
                    f"{type(entry.data).__name__} has no calendar date"
                )
        by_id = sorted(self._entries, key=lambda e: e.id)
        return EntryCollection(
            sorted(by_id, key=lambda e: e.data.date, reverse=reverse)
        )

    def tags(self) -> dict[str, EntryCollection]:
        """Build an index mapping tags to the entries carrying them."""
        index: dict[str, list[Entry]] = {}
        for entry in self._entries:
            for tag in getattr(entry.data, "tags", None) or []:
                index.setdefault(tag, []).append(entry)
        return {tag: EntryCollection(entries) for tag, entries in index.items()}

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"EntryCollection({len(self._entries)} entries)"


class CollectionLoader:
    """Loads registered collections from a project directory.

    Attributes:
        project_root: Root directory of the site project.
        registry: Mapping of collection name to definition.
    """

    def __init__(
        self,
        project_root: Path,
        registry: Mapping[str, CollectionDefinition] = COLLECTIONS,
        parser_registry: ParserRegistry | None = None,
    ):
        self.project_root = project_root
        self.registry = registry
        self._parsers = parser_registry or default_parser_registry

    def iter_files(self, definition: CollectionDefinition) -> list[Path]:
        """List the source files of a collection in a stable order.

        Files under directories starting with ``_``, and files whose name
        starts with ``_``, are skipped. A missing base directory yields no
        files.
        """
        base = self.project_root / definition.base
        if not base.is_dir():
            return []
        files = []
        for path in base.glob(definition.pattern):
            if not path.is_file():
                continue
            if is_internal_path(path.relative_to(base)):
                continue
            files.append(path)
        return sorted(files)

    def parse_entry(self, definition: CollectionDefinition, path: Path) -> Entry:
        """Parse and validate one source file.

        Raises:
            ValidationError: If the file cannot be parsed or fails the schema.
        """
        parser: RecordParser | None = self._parsers.get_parser(path)
        if parser is None:
            raise ValidationError(path, f"No parser for '{path.suffix}' files")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ValidationError(path, f"Cannot read file: {exc}", exc) from exc
        raw, body = parser.parse(text, path)
        try:
            data = definition.schema.model_validate(raw)
        except PydanticValidationError as exc:
            errors = format_pydantic_errors(exc.errors())
            summary = "; ".join(f"{loc}: {msg}" for loc, msg in errors)
            raise ValidationError(
                path,
                f"Invalid {definition.name} entry: {summary}",
                exc,
                errors=errors,
            ) from exc
        base = self.project_root / definition.base
        return Entry(
            id=entry_id(path.relative_to(base)),
            collection=definition.name,
            path=path,
            data=data,
            body=body,
        )

    def load(self, name: str) -> EntryCollection:
        """Load and validate every entry of a collection.

        Raises:
            KeyError: If the collection is not registered.
            ValidationError: On the first invalid file, or on duplicate ids.
        """
        definition = get_collection(name, self.registry)
        entries: list[Entry] = []
        seen: dict[str, Path] = {}
        for path in self.iter_files(definition):
            entry = self.parse_entry(definition, path)
            if entry.id in seen:
                raise ValidationError(
                    path,
                    f"Duplicate {name} entry id '{entry.id}' (also {seen[entry.id].name})",
                )
            seen[entry.id] = path
            entries.append(entry)
        return EntryCollection(entries)

    def load_all(self) -> dict[str, EntryCollection]:
        """Load every registered collection."""
        return {name: self.load(name) for name in self.registry}
