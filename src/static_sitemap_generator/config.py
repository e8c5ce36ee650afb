from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .exceptions import ConfigError
from .logger import get_logger

logger = get_logger(__name__)

# Used when SITE_URL is not set. Must be configured before a real deploy.
PLACEHOLDER_SITE_URL = "https://example.github.io/site"
SITE_URL_ENV = "SITE_URL"
DEFAULT_CONFIG_NAME = "sitemap.config.yml"
DEFAULT_BUILD_DIR = "out"

CHANGEFREQ_VALUES = (
    "always",
    "hourly",
    "daily",
    "weekly",
    "monthly",
    "yearly",
    "never",
)


@dataclass(frozen=True)
class RoutePolicy:
    """Crawl hints attached to a route: sitemap priority and changefreq."""

    priority: Decimal
    changefreq: str


def _policy(priority: str, changefreq: str) -> RoutePolicy:
    return RoutePolicy(priority=Decimal(priority), changefreq=changefreq)


DEFAULT_EXACT_RULES: Dict[str, RoutePolicy] = {
    "/": _policy("1.0", "weekly"),
    "/quick-reference": _policy("0.8", "weekly"),
    "/search": _policy("0.7", "monthly"),
    "/progress": _policy("0.6", "monthly"),
}


@dataclass(frozen=True)
class ClassificationRules:
    """
    Immutable classification table.

    - exact: url path -> policy, checked first
    - category: paths with exactly one segment, e.g. "/flashcards"
    - topic: paths with exactly two segments, e.g. "/databases/sql"
    - default: everything else
    """

    exact: Mapping[str, RoutePolicy] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_EXACT_RULES))
    )
    category: RoutePolicy = _policy("0.9", "weekly")
    topic: RoutePolicy = _policy("0.8", "weekly")
    default: RoutePolicy = _policy("0.7", "weekly")

    def __post_init__(self) -> None:
        # Freeze whatever mapping the caller handed in
        if not isinstance(self.exact, MappingProxyType):
            object.__setattr__(self, "exact", MappingProxyType(dict(self.exact)))


@dataclass
class SiteConfig:
    base_url: str = PLACEHOLDER_SITE_URL


@dataclass
class BuildConfig:
    build_dir: Path = Path(DEFAULT_BUILD_DIR)
    # only files ending with this suffix become routes
    suffix: str = ".html"
    sitemap_name: str = "sitemap.xml"
    robots_name: str = "robots.txt"

    @property
    def sitemap_path(self) -> Path:
        return self.build_dir / self.sitemap_name

    @property
    def robots_path(self) -> Path:
        return self.build_dir / self.robots_name


@dataclass
class AppConfig:
    site: SiteConfig = field(default_factory=SiteConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    rules: ClassificationRules = field(default_factory=ClassificationRules)
    dry_run: bool = False

    @property
    def uses_placeholder_url(self) -> bool:
        return self.site.base_url == PLACEHOLDER_SITE_URL


def normalize_base_url(url: str) -> str:
    return str(url).strip().rstrip("/")


def _load_raw_config(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")
    return data


def _parse_policy(raw: Any, where: str, fallback: RoutePolicy) -> RoutePolicy:
    if raw is None:
        return fallback
    if not isinstance(raw, dict):
        raise ConfigError(f"`{where}` must be a mapping with priority/changefreq")
    try:
        priority = Decimal(str(raw.get("priority", fallback.priority)))
    except InvalidOperation:
        raise ConfigError(f"`{where}.priority` is not a number: {raw.get('priority')!r}")
    changefreq = str(raw.get("changefreq", fallback.changefreq)).strip().lower()
    return RoutePolicy(priority=priority, changefreq=changefreq)


def parse_rules(raw: Optional[Dict[str, Any]]) -> ClassificationRules:
    """Build ClassificationRules from the `rules` section of a config file."""
    if not raw:
        return ClassificationRules()
    defaults = ClassificationRules()

    exact_raw = raw.get("exact")
    if exact_raw is None:
        exact: Dict[str, RoutePolicy] = dict(defaults.exact)
    else:
        exact = {}
        for path, policy in exact_raw.items():
            exact[str(path)] = _parse_policy(
                policy, f"rules.exact[{path!r}]", defaults.default
            )

    return ClassificationRules(
        exact=exact,
        category=_parse_policy(raw.get("category"), "rules.category", defaults.category),
        topic=_parse_policy(raw.get("topic"), "rules.topic", defaults.topic),
        default=_parse_policy(raw.get("default"), "rules.default", defaults.default),
    )


def resolve_site_url(cli_value: Optional[str] = None, file_value: Optional[str] = None) -> str:
    """CLI flag > SITE_URL env > config file > placeholder."""
    for candidate in (cli_value, os.environ.get(SITE_URL_ENV), file_value):
        if candidate and str(candidate).strip():
            return normalize_base_url(candidate)
    return PLACEHOLDER_SITE_URL


def load_config(
    path: Optional[Path] = None,
    *,
    build_dir: Optional[Path] = None,
    site_url: Optional[str] = None,
    dry_run: bool = False,
    validate: bool = True,
) -> AppConfig:
    """
    Assemble the run configuration.

    The YAML file is optional; without one the defaults plus SITE_URL are used.
    """
    # Local import: validators depends on config for the changefreq list
    from .validators import validate_app_config, validate_config_basic

    raw: Dict[str, Any] = {}
    if path is not None:
        raw = _load_raw_config(Path(path))
        logger.debug(f"Loaded config file {path}")
        if validate:
            _raise_if_errors(validate_config_basic(raw))

    site_raw = raw.get("site") or {}
    build_raw = raw.get("build") or {}

    base_url = resolve_site_url(site_url, site_raw.get("base_url"))
    build = BuildConfig(
        build_dir=Path(build_dir if build_dir is not None else build_raw.get("dir", DEFAULT_BUILD_DIR)),
        suffix=str(build_raw.get("suffix", ".html")),
        sitemap_name=str(build_raw.get("sitemap_name", "sitemap.xml")),
        robots_name=str(build_raw.get("robots_name", "robots.txt")),
    )
    rules = parse_rules(raw.get("rules"))
    config = AppConfig(
        site=SiteConfig(base_url=base_url),
        build=build,
        rules=rules,
        dry_run=dry_run,
    )

    if validate:
        _raise_if_errors(validate_app_config(config))
    return config


def _raise_if_errors(errors: List[str]) -> None:
    if errors:
        raise ConfigError(
            "Invalid configuration:\n" + "\n".join(f"  - {e}" for e in errors)
        )
