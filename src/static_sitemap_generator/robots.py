from __future__ import annotations

from pathlib import Path

from .logger import get_logger
from .url_utils import build_loc

logger = get_logger(__name__)


def render_robots_txt(base_url: str, sitemap_name: str = "sitemap.xml") -> str:
    lines = [
        "User-agent: *",
        "Allow: /",
        "",
        f"Sitemap: {build_loc(base_url, sitemap_name)}",
    ]
    return "\n".join(lines) + "\n"


def ensure_robots_txt(
    build_dir: Path,
    base_url: str,
    *,
    robots_name: str = "robots.txt",
    sitemap_name: str = "sitemap.xml",
) -> bool:
    """
    Write a permissive robots.txt pointing at the sitemap, unless one exists.

    An existing file (e.g. copied from the site's public assets) is left
    untouched. Returns True when a new file was written.
    """
    robots_path = Path(build_dir) / robots_name
    try:
        # "x" mode: never clobber a file that appeared in the meantime
        with open(robots_path, "x", encoding="utf-8", newline="\n") as f:
            f.write(render_robots_txt(base_url, sitemap_name))
    except FileExistsError:
        logger.info(f"Keeping existing {robots_path}")
        return False

    logger.info(f"robots.txt generated at {robots_path}")
    return True
