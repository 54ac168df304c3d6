from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .document import ContentDocument


def sort_documents(documents: Iterable[ContentDocument]) -> list[ContentDocument]:
    """Order documents newest first; equal dates fall back to slug order."""
    by_slug = sorted(documents, key=lambda d: d.slug)
    return sorted(by_slug, key=lambda d: d.date, reverse=True)


class DocumentListing(Sequence[ContentDocument]):
    """Snapshot of documents, ordered by descending date.

    The snapshot is taken at construction; sorting is deferred until the
    listing is first read and then cached, so every iteration yields the
    same order.
    """

    def __init__(self, documents: Iterable[ContentDocument]):
        self._documents = list(documents)
        self._sorted: list[ContentDocument] | None = None

    def _ordered(self) -> list[ContentDocument]:
        if self._sorted is None:
            self._sorted = sort_documents(self._documents)
        return self._sorted

    def __iter__(self) -> Iterator[ContentDocument]:
        return iter(self._ordered())

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, item):
        return self._ordered()[item]

    def published(self) -> DocumentListing:
        return DocumentListing(d for d in self._documents if not d.draft)

    def drafts(self) -> DocumentListing:
        return DocumentListing(d for d in self._documents if d.draft)

    def latest(self, count: int = 5) -> DocumentListing:
        return DocumentListing(self._ordered()[:count])

    def slugs(self) -> list[str]:
        return [d.slug for d in self]

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"DocumentListing({len(self._documents)} documents)"
