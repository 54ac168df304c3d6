from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from folio.config import DEFAULT_CONFIG, content_root, load_config, resolve_timezone
from folio.errors import ConfigError


def test_defaults_without_config_file(tmp_path):
    config = load_config(tmp_path)
    for key, value in DEFAULT_CONFIG.items():
        assert config[key] == value
    assert config["tzinfo"] is timezone.utc
    assert content_root(tmp_path, config) == tmp_path / "content"


def test_config_file_overrides(tmp_path):
    (tmp_path / "folio.yaml").write_text(
        "content_dir: site/content\ntimezone: '+01:00'\ndefault_section: notes\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config["content_dir"] == "site/content"
    assert config["default_section"] == "notes"
    assert config["tzinfo"] == timezone(timedelta(hours=1))
    assert content_root(tmp_path, config) == tmp_path / "site" / "content"


def test_empty_config_file_uses_defaults(tmp_path):
    (tmp_path / "folio.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path)["content_dir"] == "content"


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "content_dir: ''\n",
        "default_section: 3\n",
        "timezone: Mars/Olympus\n",
        "content_dir: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path, text):
    (tmp_path / "folio.yaml").write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_resolve_timezone():
    assert resolve_timezone("UTC") is timezone.utc
    assert resolve_timezone("-0530") == timezone(-timedelta(hours=5, minutes=30))
    assert resolve_timezone("Europe/Berlin") == ZoneInfo("Europe/Berlin")
    assert resolve_timezone("local").utcoffset(datetime.now()) is not None
    with pytest.raises(ConfigError):
        resolve_timezone("+25:00")
