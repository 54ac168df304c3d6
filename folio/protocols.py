"""Protocol definitions for Folio.

These protocols describe the seams between file discovery, metadata
extraction and document construction, so each can be swapped out in tests
or extended without modifying the others.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .document import ContentDocument


@runtime_checkable
class MetadataExtractor(Protocol):
    """Protocol for extracting one or more typed fields from front matter."""

    @abstractmethod
    def extract(self, frontmatter: dict[str, Any], body: str, path: Path) -> dict[str, Any]:
        """Extract metadata for a document.

        Args:
            frontmatter: Parsed front-matter mapping.
            body: Text following the front matter.
            path: Path to the source file.

        Returns:
            Dictionary of extracted fields.
        """
        ...


@runtime_checkable
class ContentLoader(Protocol):
    """Protocol for discovering content files."""

    @abstractmethod
    def iter_files(self) -> list[Path]:
        """Return paths of all content files, in a stable order."""
        ...


@runtime_checkable
class DocumentBuilder(Protocol):
    """Protocol for turning a content file into a ContentDocument."""

    @abstractmethod
    def read(self, path: Path) -> ContentDocument:
        """Build a ContentDocument from a source file.

        Raises:
            DocumentError: If the file cannot be parsed.
        """
        ...
