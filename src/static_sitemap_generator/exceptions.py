"""static-sitemap-generator custom exceptions."""

from __future__ import annotations

from pathlib import Path


class SitemapGeneratorError(Exception):
    """Base class for errors raised by static-sitemap-generator."""


class BuildDirectoryNotFoundError(SitemapGeneratorError):
    """The static export directory is missing; nothing can be generated."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(
            f"Build directory not found: {self.path}. "
            "Please run the site build first."
        )


class ConfigError(SitemapGeneratorError, ValueError):
    """Invalid configuration file or classification rules."""
