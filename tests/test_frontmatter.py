from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest
import yaml

from folio.errors import DocumentError
from folio.frontmatter import (
    CompositeMetadataExtractor,
    DateExtractor,
    DraftExtractor,
    TitleExtractor,
    coerce_date,
    coerce_draft,
    dump_frontmatter,
    extract_frontmatter,
)
from folio.protocols import MetadataExtractor

UTC = timezone.utc
PLUS_ONE = timezone(timedelta(hours=1))


def test_extract_frontmatter_splits_body():
    text = "---\ntitle: Hello\ndraft: true\n---\n\nFirst paragraph.\n"
    data, body = extract_frontmatter(text, Path("post.md"))
    assert data == {"title": "Hello", "draft": True}
    assert body == "First paragraph.\n"


def test_extract_frontmatter_missing_and_empty():
    assert extract_frontmatter("Just text", Path("a.md")) == ({}, "Just text")
    assert extract_frontmatter("---\n---\nBody", Path("a.md")) == ({}, "Body")


def test_extract_frontmatter_ignores_horizontal_rule_in_body():
    text = "---\ntitle: X\n---\nabove\n\n-----\n\nbelow"
    data, body = extract_frontmatter(text, Path("a.md"))
    assert data == {"title": "X"}
    assert "-----" in body


def test_extract_frontmatter_errors_carry_path():
    with pytest.raises(DocumentError) as excinfo:
        extract_frontmatter("---\ntitle: [unclosed\n---\n", Path("bad.md"))
    assert excinfo.value.source_path == Path("bad.md")
    assert isinstance(excinfo.value.original_error, yaml.YAMLError)

    with pytest.raises(DocumentError, match="mapping"):
        extract_frontmatter("---\n- a\n- b\n---\n", Path("list.md"))


def test_coerce_date_variants():
    aware = datetime(2020, 12, 21, 20, 44, 4, tzinfo=PLUS_ONE)
    assert coerce_date(aware, UTC) == aware
    assert coerce_date("2020-12-21T20:44:04+01:00", UTC) == aware
    assert coerce_date("2020-12-21 20:44:04 +0100", UTC) == aware
    assert coerce_date(date(2020, 10, 11), PLUS_ONE) == datetime(2020, 10, 11, tzinfo=PLUS_ONE)
    naive = coerce_date("2020-10-11T08:00:00", UTC)
    assert naive.tzinfo is UTC
    with pytest.raises(ValueError):
        coerce_date("next tuesday", UTC)
    with pytest.raises(ValueError):
        coerce_date(12345, UTC)


def test_yaml_timestamp_keeps_offset():
    data, _ = extract_frontmatter(
        "---\ndate: 2020-12-22T09:15:00+01:00\n---\n", Path("a.md")
    )
    parsed = coerce_date(data["date"], UTC)
    assert parsed == datetime(2020, 12, 22, 8, 15, tzinfo=UTC)
    assert parsed.utcoffset() is not None


def test_coerce_draft():
    assert coerce_draft(True) is True
    assert coerce_draft("no") is False
    assert coerce_draft(" TRUE ") is True
    assert coerce_draft(0) is False
    with pytest.raises(ValueError):
        coerce_draft("maybe")
    with pytest.raises(ValueError):
        coerce_draft(2)


def test_title_extractor_fallbacks():
    extractor = TitleExtractor()
    assert extractor.extract({"title": " Set "}, "", Path("x.md")) == {"title": "Set"}
    assert extractor.extract({"title": ""}, "# Heading\n", Path("x.md")) == {"title": "Heading"}
    assert extractor.extract({}, "body", Path("2020-01-01-my-file.md")) == {"title": "My File"}


def test_date_extractor_fallbacks(tmp_path):
    extractor = DateExtractor(UTC)
    dated = tmp_path / "2020-10-11-post.md"
    dated.write_text("x", encoding="utf-8")
    assert extractor.extract({}, "", dated)["date"] == datetime(2020, 10, 11, tzinfo=UTC)

    undated = tmp_path / "post.md"
    undated.write_text("x", encoding="utf-8")
    assert extractor.extract({}, "", undated)["date"].tzinfo is UTC

    with pytest.raises(DocumentError) as excinfo:
        extractor.extract({"date": "garbage"}, "", undated)
    assert excinfo.value.source_path == undated


def test_draft_extractor():
    extractor = DraftExtractor()
    assert extractor.extract({}, "", Path("a.md")) == {"draft": False}
    assert extractor.extract({"draft": "yes"}, "", Path("a.md")) == {"draft": True}
    with pytest.raises(DocumentError):
        extractor.extract({"draft": "sometimes"}, "", Path("a.md"))


def test_composite_extractor(tmp_path):
    path = tmp_path / "post.md"
    text = "---\ntitle: Post\ndate: 2020-10-11\ntags: [csharp]\n---\nBody"
    path.write_text(text, encoding="utf-8")
    composite = CompositeMetadataExtractor(UTC)
    assert all(isinstance(e, MetadataExtractor) for e in composite._extractors)
    result = composite.extract(text, path)
    assert result["title"] == "Post"
    assert result["date"] == datetime(2020, 10, 11, tzinfo=UTC)
    assert result["draft"] is False
    assert result["body"] == "Body"
    assert result["frontmatter"]["tags"] == ["csharp"]


def test_composite_extractor_custom_extractors():
    class WordCount:
        def extract(self, frontmatter, body, path):
            return {"words": len(body.split())}

    assert isinstance(WordCount(), MetadataExtractor)
    composite = CompositeMetadataExtractor(UTC, extractors=[])
    composite.add_extractor(WordCount())
    result = composite.extract("---\na: 1\n---\none two three", Path("a.md"))
    assert result["words"] == 3
    assert "title" not in result


def test_dump_frontmatter_round_trips_through_parser():
    text = dump_frontmatter({"title": "Héllo", "draft": False}, "Body text")
    assert text.startswith("---\ntitle: Héllo\ndraft: false\n---\n")
    data, body = extract_frontmatter(text, Path("a.md"))
    assert data == {"title": "Héllo", "draft": False}
    assert body == "Body text\n"
    assert dump_frontmatter({"title": "T"}, "") == "---\ntitle: T\n---\n"
