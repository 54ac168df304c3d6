"""Front matter parsing for Folio.

This module splits a content file into its YAML front matter and body, and
turns loosely-typed front-matter values into the typed fields of a
ContentDocument. Each field has its own extractor so new fields can be added
without touching the others.

Key classes:
- TitleExtractor: Title from front matter, first heading or filename.
- DateExtractor: Date from front matter, filename prefix or mtime.
- DraftExtractor: Draft flag from front matter.
- CompositeMetadataExtractor: Runs all extractors and merges their results.
"""

from __future__ import annotations

import re
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Any

import yaml

from .errors import DocumentError
from .protocols import MetadataExtractor
from .utils import extract_date_from_name, titleize

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n?^---\s*(?:\n|\Z)", re.DOTALL | re.MULTILINE)

TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
FALSE_STRINGS = frozenset({"false", "no", "off", "0"})

DATE_FORMATS = ("%Y-%m-%d %H:%M:%S %z", "%Y-%m-%d %H:%M %z")


def extract_frontmatter(text: str, path: Path) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.
        path: Source file, used for error reporting.

    Returns:
        Tuple of (frontmatter dict, remaining content). Content without a
        front-matter block yields an empty dict and the unchanged text.

    Raises:
        DocumentError: If the block is not valid YAML or not a mapping.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        raise DocumentError(path, f"Invalid front matter: {exc}", exc) from exc
    if not isinstance(data, dict):
        raise DocumentError(path, "Front matter must be a mapping")
    return data, text[match.end() :].lstrip("\n")


def dump_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Serialize front matter and body back into file text."""
    block = yaml.safe_dump(
        frontmatter, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    text = f"---\n{block}---\n"
    if body:
        text += "\n" + body
        if not body.endswith("\n"):
            text += "\n"
    return text


def coerce_date(value: Any, tz: tzinfo) -> datetime:
    """Convert a front-matter date value to an aware datetime.

    Args:
        value: A datetime, date or ISO-8601 string.
        tz: Timezone attached to naive values.

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = _parse_date_string(value.strip())
    else:
        raise ValueError(f"Unsupported date value: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _parse_date_string(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {text!r}")


def coerce_draft(value: Any) -> bool:
    """Convert a front-matter draft value to a bool.

    Raises:
        ValueError: If the value is not a recognizable boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    raise ValueError(f"Unsupported draft value: {value!r}")


class TitleExtractor:
    """Extracts the title.

    Uses the ``title`` key when present and non-empty, then the first
    level-1 heading in the body, then the titleized filename.
    """

    def extract(self, frontmatter: dict[str, Any], body: str, path: Path) -> dict[str, Any]:
        title = frontmatter.get("title")
        if title is not None and str(title).strip():
            return {"title": str(title).strip()}
        for line in body.splitlines():
            stripped = line.strip()
            if stripped.startswith("# "):
                return {"title": stripped.lstrip("# ").strip()}
        return {"title": titleize(path.name)}


class DateExtractor:
    """Extracts the publication date.

    Looks for a ``date`` key, then a YYYY-MM-DD filename prefix, falling
    back to file modification time.

    Attributes:
        tz: Timezone attached to naive timestamps.
    """

    def __init__(self, tz: tzinfo):
        self.tz = tz

    def extract(self, frontmatter: dict[str, Any], body: str, path: Path) -> dict[str, Any]:
        if frontmatter.get("date") is not None:
            try:
                return {"date": coerce_date(frontmatter["date"], self.tz)}
            except ValueError as exc:
                raise DocumentError(path, str(exc), exc) from exc
        parsed = extract_date_from_name(path.stem, self.tz)
        if parsed is None:
            parsed = datetime.fromtimestamp(path.stat().st_mtime, tz=self.tz)
        return {"date": parsed}


class DraftExtractor:
    """Extracts the draft flag; a missing key means published."""

    def extract(self, frontmatter: dict[str, Any], body: str, path: Path) -> dict[str, Any]:
        if frontmatter.get("draft") is None:
            return {"draft": False}
        try:
            return {"draft": coerce_draft(frontmatter["draft"])}
        except ValueError as exc:
            raise DocumentError(path, str(exc), exc) from exc


class CompositeMetadataExtractor:
    """Combines multiple metadata extractors.

    Splits off the front matter once, then runs every field extractor and
    merges their results. Later extractors can override earlier ones.
    """

    def __init__(self, tz: tzinfo, extractors: list[MetadataExtractor] | None = None):
        """Initialize with a list of extractors.

        Args:
            tz: Timezone used by the default DateExtractor.
            extractors: MetadataExtractor implementations. If None, uses
                the title, date and draft extractors.
        """
        if extractors is None:
            self._extractors = [TitleExtractor(), DateExtractor(tz), DraftExtractor()]
        else:
            self._extractors = list(extractors)

    def add_extractor(self, extractor: MetadataExtractor) -> None:
        self._extractors.append(extractor)

    def extract(self, text: str, path: Path) -> dict[str, Any]:
        """Extract all metadata from raw file text.

        Returns:
            Dictionary with ``frontmatter`` and ``body`` keys plus every
            field produced by the extractors.
        """
        frontmatter, body = extract_frontmatter(text, path)
        result: dict[str, Any] = {"frontmatter": frontmatter, "body": body}
        for extractor in self._extractors:
            result.update(extractor.extract(frontmatter, body, path))
        return result
