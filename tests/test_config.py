# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from asset_scout.config import CrawlConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def no_default_config(tmp_path, monkeypatch):
    """Run every test away from the repository's configs/default.yaml."""
    monkeypatch.chdir(tmp_path)


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seed_url: http://example.com", ".yaml", None),
        (json.dumps({"seed_url": "http://example.com"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("seed_url: ftp://example.com", ".yaml", ValidationError),
        ("seed_url: http://example.com\nunknown: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken", ".json", ValueError),
        ("seed_url = 'http://example.com'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlConfig)
        assert cfg.seed_url == "http://example.com/"
        assert cfg.allowed_hosts == ["example.com"]


def test_defaults():
    cfg = load_config(None, {"seed_url": "https://www.gadoe.org"})
    assert cfg.allowed_hosts == ["www.gadoe.org"]
    assert cfg.asset_suffixes == [".pdf"]
    assert cfg.assets_file == Path("pdf_urls.txt")
    assert cfg.ledger_file == Path("visited_urls.json")
    assert cfg.concurrency >= 1
    assert cfg.timeout > 0


def test_missing_seed_is_an_error():
    with pytest.raises(ValidationError):
        load_config(None, {"seed_url": None})


def test_overrides_win_over_file(tmp_path):
    cfg_path = write_file(
        tmp_path,
        "seed_url: https://example.org\nconcurrency: 2\nallowed_hosts: ['example.org']",
        ".yaml",
    )
    cfg = load_config(
        cfg_path,
        {"concurrency": 5, "timeout": None, "allowed_hosts": ("*.Example.org", "example.org")},
    )
    assert cfg.concurrency == 5
    assert cfg.timeout == 30.0
    assert cfg.allowed_hosts == ["*.example.org", "example.org"]


def test_empty_override_keeps_file_hosts(tmp_path):
    cfg_path = write_file(
        tmp_path, "seed_url: https://example.org\nallowed_hosts: ['*.example.org']", ".yaml"
    )
    cfg = load_config(cfg_path, {"allowed_hosts": ()})
    assert cfg.allowed_hosts == ["*.example.org"]


def test_default_file_is_used_when_present(tmp_path):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "seed_url: https://example.org\nretry_times: 0", encoding="utf-8"
    )
    assert load_config(None).retry_times == 0


def test_explicit_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "field,value",
    [("concurrency", 0), ("timeout", 0), ("retry_times", -1), ("allowed_hosts", ["bad..host"])],
)
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        CrawlConfig(seed_url="https://example.org", **{field: value})


def test_config_is_frozen():
    cfg = CrawlConfig(seed_url="https://example.org")
    with pytest.raises(ValidationError):
        cfg.concurrency = 3
