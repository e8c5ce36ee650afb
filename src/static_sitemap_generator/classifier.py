from __future__ import annotations

from typing import Optional

from .config import ClassificationRules, RoutePolicy
from .url_utils import path_segments


def classify_route(url_path: str, rules: Optional[ClassificationRules] = None) -> RoutePolicy:
    """
    Pick sitemap priority/changefreq for a route.

    Exact matches win. Otherwise the route is bucketed by the number of
    non-empty path segments: one -> category, two -> topic, else default.
    Purely structural; page content is never consulted.
    """
    if rules is None:
        rules = ClassificationRules()

    exact = rules.exact.get(url_path)
    if exact is not None:
        return exact

    depth = len(path_segments(url_path))
    if depth == 1:
        return rules.category
    if depth == 2:
        return rules.topic
    return rules.default
