from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Sequence
import xml.etree.ElementTree as ET

from .logger import get_logger
from .url_utils import build_loc

logger = get_logger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass(frozen=True)
class RouteEntry:
    url_path: str
    priority: Decimal
    changefreq: str
    lastmod: date


def format_priority(priority: Decimal) -> str:
    """
    At least one decimal place (1.0, 0.9); finer values such as 0.75 are
    written as given, never rounded.
    """
    value = Decimal(priority).normalize()
    if value.as_tuple().exponent >= -1:
        return f"{value:.1f}"
    return f"{value:f}"


def build_urlset(entries: Sequence[RouteEntry], base_url: str) -> ET.Element:
    urlset = ET.Element("urlset", attrib={"xmlns": SITEMAP_NAMESPACE})

    for entry in entries:
        url_el = ET.SubElement(urlset, "url")
        ET.SubElement(url_el, "loc").text = build_loc(base_url, entry.url_path)
        ET.SubElement(url_el, "lastmod").text = entry.lastmod.isoformat()
        ET.SubElement(url_el, "changefreq").text = entry.changefreq
        ET.SubElement(url_el, "priority").text = format_priority(entry.priority)

    return urlset


def render_sitemap(entries: Sequence[RouteEntry], base_url: str) -> bytes:
    """Serialize entries (in the given order) to a sitemap.xml document."""
    urlset = build_urlset(entries, base_url)
    ET.indent(urlset, space="  ")
    # utf-8 + XML declaration for compatibility with major search engines
    return ET.tostring(urlset, encoding="utf-8", xml_declaration=True) + b"\n"


def write_sitemap_xml(entries: Sequence[RouteEntry], base_url: str, path: Path) -> Path:
    """
    Write sitemap.xml, replacing any previous file.

    The document goes to a temp file in the destination directory first and is
    then moved over ``path``, so readers never see a half-written sitemap.
    """
    path = Path(path)
    data = render_sitemap(entries, base_url)
    _atomic_write_bytes(path, data)
    logger.info(f"Wrote sitemap.xml with {len(entries)} URLs to {path}")
    return path


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    fd, temp_path = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600 files; the sitemap is a public asset
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, path)
    except BaseException:
        Path(temp_path).unlink(missing_ok=True)
        raise
