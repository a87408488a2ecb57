# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from font_scout.config import DiscoveryConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("max_pages: 5\ninclude_subdomains: true", ".yaml", None),
        (json.dumps({"max_pages": 5, "include_subdomains": True}), ".json", None),
        ("max_pages: 0", ".yml", ValidationError),
        ("unknown_option: 1", ".yaml", ValidationError),
        ("- just\n- a list", ".yaml", TypeError),
        ("key: [unclosed", ".yaml", ValueError),
        ("{not json", ".json", ValueError),
        ("max_pages = 5", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, DiscoveryConfig)
        assert cfg.max_pages == 5
        assert cfg.include_subdomains is True
        assert cfg.timeout == 30.0


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == DiscoveryConfig()


def test_load_config_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_pages: 3\n", encoding="utf-8")
    assert load_config(None).max_pages == 3


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_config_is_frozen():
    cfg = DiscoveryConfig()
    with pytest.raises(ValidationError):
        cfg.max_pages = 3
    assert cfg.probe_concurrency is None
    assert cfg.link_soft_cap == 100
