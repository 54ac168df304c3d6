from datetime import datetime, timezone
from pathlib import Path

from folio import utils


def test_slugify_and_titleize_strip_date():
    assert utils.slugify("2024-01-02-post-title") == "post-title"
    assert utils.slugify("Clean Architecture: Part 1") == "clean-architecture-part-1"
    assert utils.slugify("!!!") == "index"
    assert utils.titleize("2024-01-02-post-title.md") == "Post Title"
    assert utils.titleize("snake_case_name.md") == "Snake Case Name"
    assert utils.titleize("---.md") == "Untitled"


def test_slug_from_path():
    assert utils.slug_from_path(Path("about.md")) == "about"
    assert utils.slug_from_path(Path("posts/2020-10-11-Hello World.md")) == "posts/hello-world"
    assert utils.slug_from_path(Path("posts/bundle/index.md")) == "posts/bundle"
    assert utils.slug_from_path(Path("posts/_index.md")) == "posts"
    assert utils.slug_from_path(Path("index.md")) == "index"
    assert utils.slug_from_path(Path("My Section/Note.md")) == "my-section/note"


def test_extract_date_from_name():
    tz = timezone.utc
    assert utils.extract_date_from_name("2024-01-15-cool", tz) == datetime(2024, 1, 15, tzinfo=tz)
    assert utils.extract_date_from_name("invalid", tz) is None
    assert utils.extract_date_from_name("2024-13-32-post", tz) is None


def test_path_predicates():
    assert utils.is_markdown(Path("a/b.MD"))
    assert not utils.is_markdown(Path("a/b.txt"))
    assert utils.is_hidden_path(Path(".git/notes.md"))
    assert not utils.is_hidden_path(Path("posts/notes.md"))
