"""
Configuration validation helpers.

Each ``validate_*`` check returns ``(is_valid, error_message)``; the
aggregate helpers return a list of messages (empty means valid).
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, List, Tuple
from urllib.parse import urlparse

from .config import CHANGEFREQ_VALUES, AppConfig, ClassificationRules, RoutePolicy


def validate_url(url: str) -> Tuple[bool, str]:
    """
    Check that ``url`` is an absolute http(s) URL.

    Returns:
        (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL must not be empty"

    url = url.strip()
    if not url:
        return False, "URL must not be empty"

    parsed = urlparse(url)
    if not parsed.scheme:
        return False, f"URL is missing a scheme: {url}"
    if parsed.scheme not in ("http", "https"):
        return False, f"URL scheme must be http or https: {url}"
    if not parsed.netloc:
        return False, f"URL is missing a host: {url}"
    return True, ""


def validate_base_url(base_url: str) -> Tuple[bool, str]:
    is_valid, msg = validate_url(base_url)
    if not is_valid:
        return False, f"base_url is invalid: {msg}"

    parsed = urlparse(base_url)
    if parsed.query or parsed.fragment:
        return False, f"base_url must not contain a query or fragment: {base_url}"
    return True, ""


def validate_priority(priority: Any) -> Tuple[bool, str]:
    try:
        value = Decimal(str(priority))
    except InvalidOperation:
        return False, f"priority is not a number: {priority!r}"
    if not value.is_finite() or value < 0 or value > 1:
        return False, f"priority must be between 0.0 and 1.0: {priority}"
    return True, ""


def validate_changefreq(changefreq: Any) -> Tuple[bool, str]:
    if changefreq not in CHANGEFREQ_VALUES:
        return False, (
            f"changefreq must be one of {', '.join(CHANGEFREQ_VALUES)}: {changefreq!r}"
        )
    return True, ""


def validate_url_path(path: Any) -> Tuple[bool, str]:
    if not isinstance(path, str) or not path.startswith("/"):
        return False, f"route must start with '/': {path!r}"
    return True, ""


def _policy_errors(policy: RoutePolicy, where: str) -> List[str]:
    errors: List[str] = []
    for ok, msg in (
        validate_priority(policy.priority),
        validate_changefreq(policy.changefreq),
    ):
        if not ok:
            errors.append(f"'{where}' {msg}")
    return errors


def validate_rules(rules: ClassificationRules) -> List[str]:
    errors: List[str] = []
    for path, policy in rules.exact.items():
        ok, msg = validate_url_path(path)
        if not ok:
            errors.append(f"'rules.exact' {msg}")
        errors.extend(_policy_errors(policy, f"rules.exact[{path!r}]"))
    errors.extend(_policy_errors(rules.category, "rules.category"))
    errors.extend(_policy_errors(rules.topic, "rules.topic"))
    errors.extend(_policy_errors(rules.default, "rules.default"))
    return errors


def validate_app_config(config: AppConfig) -> List[str]:
    errors: List[str] = []

    is_valid, msg = validate_base_url(config.site.base_url)
    if not is_valid:
        errors.append(msg)

    suffix = config.build.suffix
    if not suffix or "/" in suffix or "\\" in suffix:
        errors.append(f"'build.suffix' must be a non-empty file suffix: {suffix!r}")

    errors.extend(validate_rules(config.rules))
    return errors


def validate_config_basic(config_dict: Any) -> List[str]:
    """
    Structural check of a raw (YAML-loaded) config mapping.

    Returns:
        List of error messages (empty list means no errors)
    """
    errors: List[str] = []

    if not isinstance(config_dict, dict):
        errors.append("Config file must be a YAML mapping")
        return errors

    site = config_dict.get("site")
    if site is not None:
        if not isinstance(site, dict):
            errors.append("'site' must be a mapping")
        elif site.get("base_url") is not None:
            is_valid, msg = validate_base_url(str(site["base_url"]))
            if not is_valid:
                errors.append(msg)

    build = config_dict.get("build")
    if build is not None and not isinstance(build, dict):
        errors.append("'build' must be a mapping")

    rules = config_dict.get("rules")
    if rules is None:
        return errors
    if not isinstance(rules, dict):
        errors.append("'rules' must be a mapping")
        return errors

    exact = rules.get("exact")
    if exact is not None:
        if not isinstance(exact, dict):
            errors.append("'rules.exact' must be a mapping of route -> policy")
        else:
            for path, policy in exact.items():
                ok, msg = validate_url_path(path)
                if not ok:
                    errors.append(f"'rules.exact' {msg}")
                errors.extend(_raw_policy_errors(policy, f"rules.exact[{path!r}]"))

    for bucket in ("category", "topic", "default"):
        if rules.get(bucket) is not None:
            errors.extend(_raw_policy_errors(rules[bucket], f"rules.{bucket}"))

    return errors


def _raw_policy_errors(policy: Any, where: str) -> List[str]:
    if not isinstance(policy, dict):
        return [f"'{where}' must be a mapping with priority/changefreq"]
    errors: List[str] = []
    if "priority" in policy:
        ok, msg = validate_priority(policy["priority"])
        if not ok:
            errors.append(f"'{where}' {msg}")
    if "changefreq" in policy:
        # case-insensitive in files, normalized on load
        ok, msg = validate_changefreq(str(policy["changefreq"]).strip().lower())
        if not ok:
            errors.append(f"'{where}' {msg}")
    return errors
