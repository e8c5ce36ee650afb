from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from .classifier import classify_route
from .config import AppConfig
from .exceptions import BuildDirectoryNotFoundError
from .logger import get_logger
from .robots import ensure_robots_txt
from .scanner import DiscoveredFile, scan_files
from .sitemap import RouteEntry, format_priority, write_sitemap_xml
from .url_utils import build_loc, resolve_route

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    entries: List[RouteEntry]
    sitemap_path: Optional[Path]
    robots_written: bool
    dry_run: bool = False


def build_route_entries(
    files: Sequence[DiscoveredFile], config: AppConfig, today: date
) -> List[RouteEntry]:
    """Resolve and classify discovered files, keeping discovery order."""
    entries: List[RouteEntry] = []
    for f in files:
        url_path = resolve_route(f.relative_path, config.build.suffix)
        policy = classify_route(url_path, config.rules)
        entries.append(
            RouteEntry(
                url_path=url_path,
                priority=policy.priority,
                changefreq=policy.changefreq,
                lastmod=today,
            )
        )
    return entries


def _print_summary(config: AppConfig, entries: List[RouteEntry]) -> None:
    by_priority = Counter(format_priority(e.priority) for e in entries)
    logger.info("Routes by priority:")
    for priority, count in sorted(by_priority.items(), reverse=True):
        logger.info(f"  - {priority}: {count}")

    # Show a small sample for quick inspection
    logger.info("Sample URLs:")
    for e in entries[:10]:
        logger.info(
            f"  [{format_priority(e.priority)} {e.changefreq}] "
            f"{build_loc(config.site.base_url, e.url_path)}"
        )


def generate_sitemap(config: AppConfig, today: Optional[date] = None) -> GenerationResult:
    """
    Run the whole post-processing pass over the static export directory:
    scan -> resolve -> classify -> write sitemap.xml -> ensure robots.txt.

    Raises BuildDirectoryNotFoundError before anything is written when the
    build directory is missing. Other filesystem errors propagate as-is.
    """
    build_dir = config.build.build_dir
    if not build_dir.is_dir():
        raise BuildDirectoryNotFoundError(build_dir)

    if config.uses_placeholder_url:
        logger.warning(
            f"SITE_URL is not set; using placeholder {config.site.base_url}. "
            "Set SITE_URL before deploying."
        )

    if today is None:
        today = datetime.now(timezone.utc).date()

    files = scan_files(build_dir, config.build.suffix)
    entries = build_route_entries(files, config, today)
    logger.info(f"Discovered {len(entries)} routes in {build_dir}")

    if config.dry_run:
        _print_summary(config, entries)
        logger.info("[DRY RUN] Not writing sitemap.xml or robots.txt")
        return GenerationResult(
            entries=entries, sitemap_path=None, robots_written=False, dry_run=True
        )

    sitemap_path = write_sitemap_xml(
        entries, config.site.base_url, config.build.sitemap_path
    )
    logger.info(f"Site URL: {config.site.base_url}")

    robots_written = ensure_robots_txt(
        build_dir,
        config.site.base_url,
        robots_name=config.build.robots_name,
        sitemap_name=config.build.sitemap_name,
    )
    return GenerationResult(
        entries=entries, sitemap_path=sitemap_path, robots_written=robots_written
    )
