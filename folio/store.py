"""In-memory document store for Folio.

The store holds a collection of ContentDocument records keyed by slug and
enforces slug uniqueness. Every operation either completes or raises before
touching the collection.
"""

from __future__ import annotations

from collections.abc import Iterable

from .collections import DocumentListing
from .document import ContentDocument
from .errors import DuplicateSlugError, NotFoundError


class DocumentStore:
    """Registry of content documents keyed by slug."""

    def __init__(self, documents: Iterable[ContentDocument] = ()):
        self._documents: dict[str, ContentDocument] = {}
        for document in documents:
            self.add(document)

    def add(self, document: ContentDocument) -> None:
        """Insert a document.

        Raises:
            DuplicateSlugError: If a document with the same slug is stored.
        """
        if document.slug in self._documents:
            raise DuplicateSlugError(document.slug, document.path)
        self._documents[document.slug] = document

    def remove(self, slug: str) -> ContentDocument:
        """Delete a document and return it.

        Raises:
            NotFoundError: If no document has this slug.
        """
        if slug not in self._documents:
            raise NotFoundError(slug)
        return self._documents.pop(slug)

    def replace(self, document: ContentDocument) -> ContentDocument:
        """Swap a stored document for a new version with the same slug.

        Returns:
            The previous version.

        Raises:
            NotFoundError: If no document has this slug.
        """
        previous = self.get(document.slug)
        self._documents[document.slug] = document
        return previous

    def get(self, slug: str) -> ContentDocument:
        try:
            return self._documents[slug]
        except KeyError:
            raise NotFoundError(slug) from None

    def list(self, include_drafts: bool = False) -> DocumentListing:
        """List documents newest first.

        Args:
            include_drafts: Whether draft documents are included.

        Returns:
            A DocumentListing snapshot of the current collection.
        """
        listing = DocumentListing(self._documents.values())
        return listing if include_drafts else listing.published()

    def __contains__(self, slug: object) -> bool:
        return slug in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"{type(self).__name__}({len(self._documents)} documents)"
