"""Exceptions raised by Folio.

Every error derives from FolioError so callers (the CLI in particular) can
catch the whole family in one place.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all Folio errors."""


class DuplicateSlugError(FolioError):
    """Raised when a document's slug collides with one already stored.

    Attributes:
        slug: The colliding slug.
        path: Source file of the rejected document, if known.
    """

    def __init__(self, slug: str, path: Path | None = None):
        self.slug = slug
        self.path = path
        message = f"Slug already exists: {slug}"
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class NotFoundError(FolioError):
    """Raised when an operation references a slug that is not stored."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"No document with slug: {slug}")


class DocumentError(FolioError):
    """A content file could not be parsed.

    Attributes:
        source_path: Path to the offending file.
        message: Human-readable error message.
        original_error: The underlying exception, if any.
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


class ConfigError(FolioError):
    """Invalid value in folio.yaml."""
