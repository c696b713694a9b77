"""Utility functions for Folio.

Key functions:
    slugify: Convert filenames to URL slugs.
    entry_id: Derive a collection entry id from a relative path.
    is_http_url: Check that text is an absolute http(s) URL.
    apply_trailing_slash: Apply a trailing-slash policy to a URL path.
    is_internal_path: Check for underscore-prefixed path components.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def slugify(name: str) -> str:
    """Convert a filename stem or path segment to a slug.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("Hello World")
        'hello-world'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def entry_id(rel: Path) -> str:
    """Derive an entry id from a path relative to its collection base.

    The extension is dropped and every segment is slugified.

    Examples:
        >>> entry_id(Path("2024/Hello World.mdx"))
        '2024/hello-world'
    """
    parts = list(rel.parent.parts) + [rel.stem]
    return "/".join(slugify(part) for part in parts if part not in ("", "."))


def is_http_url(value: str) -> bool:
    """Check whether text parses as an absolute http(s) URL.

    Examples:
        >>> is_http_url("https://example.com/a")
        True
        >>> is_http_url("example.com")
        False
    """
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def apply_trailing_slash(path: str, policy: str) -> str:
    """Apply a trailing-slash policy to a URL path.

    ``always`` adds a slash, ``never`` removes it, ``ignore`` leaves the path
    as given. The root path ``/`` is never stripped. Paths whose last segment
    looks like a file (``feed.xml``) are left alone.

    Args:
        path: URL path starting with ``/``.
        policy: One of ``ignore``, ``always`` or ``never``.

    Returns:
        The adjusted path.
    """
    if policy == "ignore" or path == "/":
        return path
    if "." in PurePosixPath(path).name:
        return path
    if policy == "always":
        return path if path.endswith("/") else f"{path}/"
    return path.rstrip("/") or "/"


def is_internal_path(path: Path) -> bool:
    """Check if a path is internal (contains components starting with _).

    Internal paths are drafts and partials that are never loaded as entries.
    """
    return any(part.startswith("_") for part in path.parts)
