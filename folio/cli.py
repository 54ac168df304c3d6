"""Command-line interface for Folio.

This module defines the CLI commands using the Click framework. Commands
operate on the content directory of the project in the current working
directory.

Commands:
- list: List documents newest first.
- new: Create a new document.
- publish / unpublish: Flip a document's draft flag.
- remove: Delete a document.
- check: Validate every content file.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import click
import questionary

from . import __version__
from .config import content_root, load_config
from .document import ContentDocument
from .errors import DocumentError, FolioError
from .files import DiskDocumentStore, validate_collection
from .utils import INDEX_NAMES, slug_from_path, slugify

ROOT_SECTION = ". (root)"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger for CLI use; safe to call repeatedly."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Folio content collection manager."""
    configure_logging(verbose)


@cli.command(name="list")
@click.option("--drafts", is_flag=True, help="Include draft content")
def list_documents(drafts: bool):
    """List documents, newest first."""
    _, store = _open_store(Path.cwd())
    listing = store.list(include_drafts=drafts)
    if not listing:
        click.echo("No documents found.")
        return
    for document in listing:
        line = f"{document.date:%Y-%m-%d %H:%M %z}  {document.slug}  {document.title}"
        if document.draft:
            line += " " + click.style("[draft]", fg="yellow")
        click.echo(line)


@cli.command()
@click.argument("title")
@click.option("--section", default=None, help="Folder to create the document in")
@click.option("--publish", is_flag=True, help="Create the document as published")
def new(title: str, section: str | None, publish: bool):
    """Create a new document titled TITLE."""
    config, store = _open_store(Path.cwd())
    if not title.strip():
        raise click.ClickException("Title cannot be empty")

    if section is None:
        section = _pick_section(store.root, config["default_section"])

    name = slugify(title)
    if name in INDEX_NAMES:
        raise click.ClickException(
            f"'{title.strip()}' would become a section index page; choose another title"
        )
    folder = store.root if section in ("", ".", ROOT_SECTION) else store.root / section
    path = folder / f"{name}.md"
    now = datetime.now(config["tzinfo"]).replace(microsecond=0)
    document = ContentDocument(
        title=title.strip(),
        date=now,
        draft=not publish,
        body="",
        slug=slug_from_path(path.relative_to(store.root)),
        path=path,
    )
    try:
        store.add(document)
    except FolioError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created {document.path.relative_to(Path.cwd())} ({document.slug})")


@cli.command()
@click.argument("slug")
def publish(slug: str):
    """Mark the document SLUG as published."""
    _set_draft(slug, False)


@cli.command()
@click.argument("slug")
def unpublish(slug: str):
    """Mark the document SLUG as a draft."""
    _set_draft(slug, True)


@cli.command()
@click.argument("slug")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def remove(slug: str, yes: bool):
    """Delete the document SLUG."""
    _, store = _open_store(Path.cwd())
    if slug not in store:
        raise click.ClickException(f"No document with slug: {slug}")
    if not yes:
        confirmed = questionary.confirm(
            f"Delete '{slug}'?",
            default=False,
            style=_questionary_style(),
        ).ask()
        if not confirmed:
            raise click.Abort()
    document = store.remove(slug)
    click.echo(f"Removed {slug} ({document.title})")


@cli.command()
def check():
    """Validate every content file."""
    project_root = Path.cwd()
    config = _load_config(project_root)
    root = content_root(project_root, config)
    if not root.exists():
        raise click.ClickException(f"No content directory found at {root}")
    issues = validate_collection(root, config["tzinfo"])
    if not issues:
        click.echo("All documents are valid.")
        return
    for issue in issues:
        rel_path = issue.path.relative_to(project_root)
        click.echo(click.style(f"{rel_path}: ", fg="yellow") + issue.message, err=True)
    click.echo(click.style(f"{len(issues)} problem(s) found", fg="red", bold=True), err=True)
    raise SystemExit(1)


def _load_config(project_root: Path) -> dict[str, Any]:
    try:
        return load_config(project_root)
    except FolioError as exc:
        raise click.ClickException(str(exc)) from exc


def _open_store(project_root: Path) -> tuple[dict[str, Any], DiskDocumentStore]:
    """Load configuration and the on-disk store, reporting failures for the CLI."""
    config = _load_config(project_root)
    root = content_root(project_root, config)
    if not root.exists():
        raise click.ClickException(
            f"No {config['content_dir']}/ directory found. Run this command from a project root."
        )
    try:
        store = DiskDocumentStore(root, config["tzinfo"])
    except DocumentError as exc:
        rel_path = exc.source_path.relative_to(project_root)
        click.echo(click.style("Load failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    except FolioError as exc:
        raise click.ClickException(str(exc)) from exc
    return config, store


def _set_draft(slug: str, draft: bool) -> None:
    _, store = _open_store(Path.cwd())
    try:
        document = store.get(slug)
    except FolioError as exc:
        raise click.ClickException(str(exc)) from exc
    state = "a draft" if draft else "published"
    if document.draft == draft:
        click.echo(f"{slug} is already {state}")
        return
    updated = dataclasses.replace(
        document,
        draft=draft,
        frontmatter={**document.frontmatter, "draft": draft},
    )
    store.replace(updated)
    click.echo(f"{slug} is now {state}")


def _get_sections(root: Path) -> list[str]:
    """Get list of section folders in the content directory.

    Hidden folders are excluded; the root option comes first.
    """
    sections = sorted(
        path.name
        for path in root.iterdir()
        if path.is_dir() and not path.name.startswith(".")
    )
    sections.insert(0, ROOT_SECTION)
    return sections


def _pick_section(root: Path, default_section: str) -> str:
    """Ask which section a new document goes in."""
    sections = _get_sections(root)
    if len(sections) == 1:
        return default_section
    section = questionary.select(
        "Select section:",
        choices=sections,
        default=default_section if default_section in sections else None,
        style=_questionary_style(),
    ).ask()
    if section is None:
        raise click.Abort()
    return section


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
