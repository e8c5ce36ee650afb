from __future__ import annotations

import os
from urllib.parse import quote

# RFC 3986 sub-delims plus ":@/" and "%" so escapes are not doubled
_PATH_SAFE = "/!$&'()*+,;=:@%"


def resolve_route(relative_path: str, suffix: str = ".html") -> str:
    """
    Map a file path relative to the build directory to its canonical URL path.

    - "index.html"               -> "/"
    - "flashcards/index.html"    -> "/flashcards"
    - "databases/sql/index.html" -> "/databases/sql"
    - "foo/bar.html"             -> "/foo/bar"
    """
    path = relative_path.replace("\\", "/")
    if os.sep != "/":
        path = path.replace(os.sep, "/")

    if suffix and path.endswith(suffix):
        path = path[: -len(suffix)]

    if path.endswith("/index"):
        path = path[: -len("/index")]

    if path in ("", "index", "/", "/index"):
        return "/"
    if not path.startswith("/"):
        path = "/" + path
    return path


def build_loc(base_url: str, url_path: str) -> str:
    """
    Join base URL and route with exactly one slash between them.

    Characters not allowed in a URL path (spaces, non-ASCII) are
    percent-encoded; existing escapes and reserved characters are kept.
    """
    path = quote(url_path.lstrip("/"), safe=_PATH_SAFE)
    return base_url.rstrip("/") + "/" + path


def path_segments(url_path: str) -> list[str]:
    return [seg for seg in url_path.split("/") if seg]
