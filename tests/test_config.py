"""
Config loading tests
"""
from decimal import Decimal
from pathlib import Path

import pytest

from static_sitemap_generator.config import (
    PLACEHOLDER_SITE_URL,
    ClassificationRules,
    RoutePolicy,
    load_config,
    parse_rules,
    resolve_site_url,
)
from static_sitemap_generator.exceptions import ConfigError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "sitemap.config.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file():
    config = load_config()
    assert config.site.base_url == PLACEHOLDER_SITE_URL
    assert config.build.build_dir == Path("out")
    assert config.build.sitemap_path == Path("out") / "sitemap.xml"
    assert config.build.robots_path == Path("out") / "robots.txt"
    assert config.rules == ClassificationRules()


def test_load_from_yaml(tmp_path: Path):
    path = _write(
        tmp_path,
        """
site:
  base_url: "https://docs.example.com/"
build:
  dir: "public"
rules:
  exact:
    "/": {priority: 1.0, changefreq: daily}
    "/changelog": {priority: 0.5, changefreq: Monthly}
  topic: {priority: 0.6}
""",
    )
    config = load_config(path)
    assert config.site.base_url == "https://docs.example.com"
    assert config.build.build_dir == Path("public")
    assert config.rules.exact["/"] == RoutePolicy(Decimal("1.0"), "daily")
    assert config.rules.exact["/changelog"].changefreq == "monthly"
    # an explicit exact table replaces the default one
    assert "/search" not in config.rules.exact
    # unspecified fields fall back to the defaults
    assert config.rules.topic == RoutePolicy(Decimal("0.6"), "weekly")
    assert config.rules.category == ClassificationRules().category


def test_site_url_precedence(tmp_path: Path, monkeypatch):
    path = _write(tmp_path, 'site:\n  base_url: "https://file.example.com"\n')
    assert load_config(path).site.base_url == "https://file.example.com"

    monkeypatch.setenv("SITE_URL", "https://env.example.com")
    assert load_config(path).site.base_url == "https://env.example.com"
    assert (
        load_config(path, site_url="https://flag.example.com").site.base_url
        == "https://flag.example.com"
    )


def test_resolve_site_url_ignores_blank_values(monkeypatch):
    monkeypatch.setenv("SITE_URL", "   ")
    assert resolve_site_url(None, "") == PLACEHOLDER_SITE_URL
    assert resolve_site_url("", "https://x.example.com///") == "https://x.example.com"


def test_build_dir_argument_overrides_file(tmp_path: Path):
    path = _write(tmp_path, "build:\n  dir: public\n")
    assert load_config(path, build_dir=tmp_path / "dist").build.build_dir == tmp_path / "dist"


def test_parse_rules_empty_section():
    assert parse_rules(None) == ClassificationRules()
    assert parse_rules({}) == ClassificationRules()


def test_invalid_values_raise_config_error(tmp_path: Path):
    path = _write(tmp_path, "rules:\n  category: {priority: 1.5, changefreq: weekly}\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config(path)
    assert "rules.category" in str(exc_info.value)


def test_non_mapping_root_raises(tmp_path: Path):
    path = _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_no_validate_skips_range_checks(tmp_path: Path):
    path = _write(tmp_path, "rules:\n  default: {priority: 2}\n")
    config = load_config(path, validate=False)
    assert config.rules.default.priority == Decimal("2")


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
