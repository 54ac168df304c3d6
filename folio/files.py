"""File-backed content for Folio.

Each document is persisted as one markdown file under a content root. This
module discovers those files, reads them into ContentDocument records,
writes documents back out, and keeps a DocumentStore in sync with the disk.

Key classes:
- FileDocumentLoader: Discovers content files under a root directory.
- DocumentReader: Builds ContentDocument objects from files.
- DocumentWriter: Serializes ContentDocument objects to file text.
- DiskDocumentStore: DocumentStore that mirrors mutations to files.

Key functions:
- load_store: Build an in-memory DocumentStore from a content root.
- validate_collection: Report every problem in a content root.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path

from .document import ContentDocument
from .errors import DocumentError, DuplicateSlugError
from .frontmatter import CompositeMetadataExtractor, dump_frontmatter
from .protocols import ContentLoader, DocumentBuilder
from .store import DocumentStore
from .utils import is_hidden_path, is_markdown, slug_from_path

logger = logging.getLogger(__name__)


class FileDocumentLoader:
    """Discovers markdown files below a content root.

    Attributes:
        root: Content root directory.
    """

    def __init__(self, root: Path):
        self.root = root

    def iter_files(self) -> list[Path]:
        files: list[Path] = []
        if not self.root.exists():
            return files
        for path in sorted(self.root.rglob("*")):
            if path.is_dir():
                continue
            rel = path.relative_to(self.root)
            if is_hidden_path(rel):
                logger.debug("Skipping hidden path %s", rel)
                continue
            if is_markdown(path):
                files.append(path)
        return files


class DocumentReader:
    """Builds ContentDocument objects from content files.

    Attributes:
        root: Content root; slugs are derived relative to it.
        metadata_extractor: Extractor producing title, date and draft.
    """

    def __init__(
        self,
        root: Path,
        tz: tzinfo = timezone.utc,
        metadata_extractor: CompositeMetadataExtractor | None = None,
    ):
        self.root = root
        self.metadata_extractor = metadata_extractor or CompositeMetadataExtractor(tz)

    def read(self, path: Path) -> ContentDocument:
        """Build a ContentDocument from a source file.

        Args:
            path: Path to a file below the content root.

        Returns:
            ContentDocument with its slug derived from the path.

        Raises:
            DocumentError: If the file cannot be decoded or parsed.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentError(path, f"Cannot read file: {exc}", exc) from exc
        metadata = self.metadata_extractor.extract(raw, path)
        return ContentDocument(
            title=metadata["title"],
            date=metadata["date"],
            draft=metadata["draft"],
            body=metadata["body"],
            slug=slug_from_path(path.relative_to(self.root)),
            path=path,
            frontmatter=metadata["frontmatter"],
        )


class DocumentWriter:
    """Serializes documents to front matter plus body."""

    def render(self, document: ContentDocument) -> str:
        frontmatter = {
            "title": document.title,
            "date": document.date.isoformat(),
            "draft": document.draft,
        }
        frontmatter.update(document.extra_frontmatter)
        return dump_frontmatter(frontmatter, document.body)

    def write(self, document: ContentDocument, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(document), encoding="utf-8")


def iter_documents(
    root: Path,
    loader: ContentLoader | None = None,
    reader: DocumentBuilder | None = None,
    tz: tzinfo = timezone.utc,
) -> Iterator[ContentDocument]:
    """Yield a document for every content file under root."""
    loader = loader or FileDocumentLoader(root)
    reader = reader or DocumentReader(root, tz)
    for path in loader.iter_files():
        document = reader.read(path)
        logger.debug("Loaded %s from %s", document.slug, path)
        yield document


def load_store(root: Path, tz: tzinfo = timezone.utc) -> DocumentStore:
    """Build an in-memory store from the files under root.

    Raises:
        DuplicateSlugError: If two files map to the same slug.
        DocumentError: If a file cannot be parsed.
    """
    return DocumentStore(iter_documents(root, tz=tz))


class DiskDocumentStore(DocumentStore):
    """DocumentStore whose mutations are written to the content root.

    The file is written or deleted before the in-memory collection changes,
    so a failed disk operation leaves the store as it was.

    Attributes:
        root: Content root directory.
        writer: DocumentWriter used for serialization.
    """

    def __init__(
        self,
        root: Path,
        tz: tzinfo = timezone.utc,
        writer: DocumentWriter | None = None,
    ):
        self.root = root
        self.writer = writer or DocumentWriter()
        super().__init__()
        for document in iter_documents(root, tz=tz):
            super().add(document)

    def path_for(self, document: ContentDocument) -> Path:
        """Return where a document is stored, deriving it from the slug if unset."""
        if document.path is not None:
            return document.path
        return self.root / f"{document.slug}.md"

    def _check_identity(self, document: ContentDocument, target: Path) -> None:
        """Ensure the file at target reloads under the document's slug.

        Raises:
            DocumentError: If target is outside the root or maps to another slug.
        """
        try:
            rel = target.relative_to(self.root)
        except ValueError as exc:
            raise DocumentError(target, f"Path is outside {self.root}", exc) from exc
        derived = slug_from_path(rel)
        if derived != document.slug:
            raise DocumentError(
                target, f"File maps to slug '{derived}', not '{document.slug}'"
            )

    def add(self, document: ContentDocument) -> None:
        if document.slug in self:
            raise DuplicateSlugError(document.slug, document.path)
        target = self.path_for(document)
        self._check_identity(document, target)
        if target.exists():
            raise DuplicateSlugError(document.slug, target)
        self.writer.write(document, target)
        logger.info("Wrote %s", target)
        document.path = target
        super().add(document)

    def replace(self, document: ContentDocument) -> ContentDocument:
        previous = self.get(document.slug)
        target = document.path or previous.path or self.path_for(document)
        self._check_identity(document, target)
        self.writer.write(document, target)
        logger.info("Rewrote %s", target)
        if previous.path is not None and previous.path != target and previous.path.exists():
            previous.path.unlink()
            logger.info("Deleted %s", previous.path)
        document.path = target
        return super().replace(document)

    def remove(self, slug: str) -> ContentDocument:
        document = self.get(slug)
        if document.path is not None and document.path.exists():
            document.path.unlink()
            logger.info("Deleted %s", document.path)
        return super().remove(slug)


@dataclass
class Issue:
    """A problem found while validating a content root.

    Attributes:
        path: File the problem belongs to.
        message: Human-readable description.
    """

    path: Path
    message: str


def validate_collection(root: Path, tz: tzinfo = timezone.utc) -> list[Issue]:
    """Check every content file under root without stopping at the first error.

    Reports files that cannot be parsed, slugs shared by several files, and
    documents whose front matter lacks ``title`` or ``date``.

    Args:
        root: Content root directory.
        tz: Timezone applied to naive dates.

    Returns:
        Issues in file order; empty when the collection is clean.
    """
    issues: list[Issue] = []
    reader = DocumentReader(root, tz)
    seen: dict[str, Path] = {}
    for path in FileDocumentLoader(root).iter_files():
        try:
            document = reader.read(path)
        except DocumentError as exc:
            issues.append(Issue(path, exc.message))
            continue
        if document.slug in seen:
            other = seen[document.slug].relative_to(root)
            issues.append(
                Issue(path, f"Duplicate slug '{document.slug}' (also used by {other})")
            )
        else:
            seen[document.slug] = path
        for key in ("title", "date"):
            if document.frontmatter.get(key) in (None, ""):
                issues.append(Issue(path, f"Missing '{key}' in front matter"))
    return issues
