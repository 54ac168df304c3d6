"""Content documents for Folio.

A ContentDocument is one authored unit of content: typed front-matter fields
plus a markup body. Its identity is the slug derived from where the file is
stored.

Key classes:
- ContentDocument: Dataclass for a single document.
- Block: One top-level block of a document body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import mistune

# Keys modelled as typed fields; everything else is carried through untouched.
CORE_KEYS = ("title", "date", "draft")

_block_parser = mistune.create_markdown(
    renderer="ast", plugins=["strikethrough", "table", "url"]
)


@dataclass
class Block:
    """A top-level block of a document body.

    Attributes:
        kind: Block type as reported by the markdown parser
            (``paragraph``, ``heading``, ``block_code``, ``list`` ...).
        text: Plain text of the block; code blocks keep their raw source.
        links: URLs of links and images inside the block, in order.
    """

    kind: str
    text: str
    links: list[str] = field(default_factory=list)


@dataclass
class ContentDocument:
    """A single content document.

    Attributes:
        title: Human-readable title.
        date: Timezone-aware publication timestamp.
        draft: Whether the document is excluded from published listings.
        body: Markup text following the front matter.
        slug: Unique identity derived from the storage path.
        path: Source file, if the document was loaded from or saved to disk.
        frontmatter: All front-matter keys as loaded, including ones Folio
            does not model.
    """

    title: str
    date: datetime
    draft: bool
    body: str
    slug: str
    path: Path | None = None
    frontmatter: dict[str, Any] = field(default_factory=dict)

    @property
    def extra_frontmatter(self) -> dict[str, Any]:
        """Front-matter keys other than title, date and draft."""
        return {k: v for k, v in self.frontmatter.items() if k not in CORE_KEYS}

    @property
    def blocks(self) -> list[Block]:
        """Segment the body into top-level blocks."""
        return parse_blocks(self.body)

    @property
    def links(self) -> list[str]:
        """Every link target in the body, in document order."""
        return [url for block in self.blocks for url in block.links]


def parse_blocks(body: str) -> list[Block]:
    """Parse markup text into a list of top-level blocks.

    Args:
        body: Markdown text.

    Returns:
        Blocks in document order, blank lines dropped.
    """
    blocks: list[Block] = []
    for token in _block_parser(body):
        kind = token.get("type", "")
        if kind == "blank_line":
            continue
        links: list[str] = []
        _collect_links(token, links)
        blocks.append(Block(kind=kind, text=_token_text(token).strip(), links=links))
    return blocks


def _token_text(token: dict[str, Any]) -> str:
    kind = token.get("type")
    if kind in ("softbreak", "linebreak"):
        return "\n"
    if "raw" in token:
        return token["raw"]
    children = token.get("children") or []
    if kind in ("list", "block_quote"):
        return "\n".join(_token_text(child).strip() for child in children)
    return "".join(_token_text(child) for child in children)


def _collect_links(token: dict[str, Any], links: list[str]) -> None:
    if token.get("type") in ("link", "image"):
        url = (token.get("attrs") or {}).get("url")
        if url:
            links.append(url)
    for child in token.get("children") or []:
        _collect_links(child, links)
