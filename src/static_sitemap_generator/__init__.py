"""
Static Sitemap Generator

Post-processes a statically exported website: sitemap.xml and robots.txt.
"""

__all__ = [
    "__version__",
    "classifier",
    "config",
    "generator",
    "robots",
    "scanner",
    "sitemap",
    "url_utils",
]

__version__ = "0.1.0"
