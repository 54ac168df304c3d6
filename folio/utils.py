"""Utility functions for Folio.

String and path helpers shared by the loader, the store and the CLI.

Key functions:
    slugify: Convert a file name stem to a URL slug.
    slug_from_path: Derive a document slug from its storage path.
    titleize: Convert a file name to a human-readable title.
    extract_date_from_name: Extract a date from a file name prefix.
    is_markdown: Check if a path is a Markdown file.
    is_hidden_path: Check if a path has a dot-prefixed component.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from pathlib import Path

INDEX_NAMES = ("index", "_index")


def _strip_date_prefix(name: str) -> str:
    parts = name.split("-")
    if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
        return "-".join(parts[3:])
    return name


def slugify(name: str) -> str:
    """Convert filename (without extension) to slug, dropping date prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.
    """
    cleaned = _strip_date_prefix(name)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def slug_from_path(rel: Path) -> str:
    """Derive the slug for a document from its path relative to the content root.

    Directory segments are slugified and joined with ``/``. A file named
    ``index.md`` or ``_index.md`` takes the slug of its directory.

    Args:
        rel: Path relative to the content root.

    Returns:
        Slug such as ``posts/my-post``, or ``index`` for the root index.

    Examples:
        >>> slug_from_path(Path("posts/2020-10-11-hello-world.md"))
        'posts/hello-world'

        >>> slug_from_path(Path("posts/bundle/index.md"))
        'posts/bundle'
    """
    segments = [slugify(part) for part in rel.parent.parts if part not in ("", ".")]
    if rel.stem not in INDEX_NAMES:
        segments.append(slugify(rel.stem))
    return "/".join(segments) or "index"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Removes date prefixes (YYYY-MM-DD), replaces hyphens and underscores
    with spaces, and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("2024-01-15-hello-world.md")
        'Hello World'
    """
    base = _strip_date_prefix(Path(filename).stem)
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def extract_date_from_name(name: str, tz: tzinfo) -> datetime | None:
    """Extract a date from a filename with YYYY-MM-DD prefix.

    Args:
        name: Filename stem (without extension).
        tz: Timezone attached to the resulting midnight timestamp.

    Returns:
        Aware datetime if a valid date prefix is found, None otherwise.
    """
    parts = name.split("-")
    if len(parts) >= 3 and all(p.isdigit() for p in parts[:3]):
        try:
            return datetime(int(parts[0]), int(parts[1]), int(parts[2]), tzinfo=tz)
        except ValueError:
            return None
    return None


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file (case-insensitive ``.md``)."""
    return path.suffix.lower() == ".md"


def is_hidden_path(path: Path) -> bool:
    """Check if any component of a path starts with a dot."""
    return any(part.startswith(".") for part in path.parts)
