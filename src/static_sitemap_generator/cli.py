import argparse
import sys
from pathlib import Path

from .config import (
    DEFAULT_BUILD_DIR,
    DEFAULT_CONFIG_NAME,
    PLACEHOLDER_SITE_URL,
    SITE_URL_ENV,
    load_config,
)
from .exceptions import BuildDirectoryNotFoundError, ConfigError
from .generator import generate_sitemap
from .logger import set_log_level


CONFIG_TEMPLATE = f"""# static-sitemap-generator config
#
# Everything here is optional. Without this file the defaults below are used
# and the site URL comes from the {SITE_URL_ENV} environment variable.
# Precedence for the site URL: --site-url > ${SITE_URL_ENV} > site.base_url.

site:
  # Uncomment and set before deploying; until a URL is configured the
  # placeholder {PLACEHOLDER_SITE_URL} is used and a warning is logged.
  # base_url: "https://example.com"

build:
  # static export directory; sitemap.xml and robots.txt are written here
  dir: "{DEFAULT_BUILD_DIR}"
  suffix: ".html"

rules:
  # exact routes win over the segment-count buckets below
  exact:
    "/": {{priority: 1.0, changefreq: weekly}}
    "/quick-reference": {{priority: 0.8, changefreq: weekly}}
    "/search": {{priority: 0.7, changefreq: monthly}}
    "/progress": {{priority: 0.6, changefreq: monthly}}

  # one path segment, e.g. /databases
  category: {{priority: 0.9, changefreq: weekly}}
  # two path segments, e.g. /databases/sql
  topic: {{priority: 0.8, changefreq: weekly}}
  # everything else
  default: {{priority: 0.7, changefreq: weekly}}
"""


def cmd_init(args):
    """Create a starter config file in the current directory."""
    target = Path(args.path or DEFAULT_CONFIG_NAME)
    if target.exists() and not args.force:
        print(f"[WARN] Config file already exists: {target}", file=sys.stderr)
        return 1

    target.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    print(f"[OK] Created config file: {target}")
    return 0


def _resolve_config_path(args):
    if args.config:
        return Path(args.config)
    default = Path(DEFAULT_CONFIG_NAME)
    # The config file is optional when not asked for explicitly
    return default if default.exists() else None


def cmd_generate(args):
    """Generate sitemap.xml (and robots.txt if missing) for the build directory."""
    if getattr(args, "verbose", False):
        set_log_level("DEBUG")

    config_path = _resolve_config_path(args)
    if config_path is not None and not config_path.exists():
        print(f"[ERROR] Config file not found: {config_path}", file=sys.stderr)
        return 1

    try:
        config = load_config(
            config_path,
            build_dir=Path(args.build_dir) if args.build_dir else None,
            site_url=args.site_url,
            dry_run=bool(args.dry_run),
            validate=not getattr(args, "no_validate", False),
        )
    except ConfigError as e:
        print("[ERROR] Configuration validation failed:", file=sys.stderr)
        print(f"{e}", file=sys.stderr)
        return 1

    try:
        generate_sitemap(config)
    except BuildDirectoryNotFoundError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


def _add_generate_arguments(p):
    p.add_argument(
        "-c",
        "--config",
        help=f"Config file path (default: {DEFAULT_CONFIG_NAME} if present)",
    )
    p.add_argument(
        "-d",
        "--build-dir",
        help=f"Static export directory (default: {DEFAULT_BUILD_DIR})",
    )
    p.add_argument(
        "--site-url",
        help=f"Base site URL (overrides ${SITE_URL_ENV} and the config file).",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not write files; only print route counts and sample URLs.",
    )
    p.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip configuration validation (not recommended).",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="static-sitemap-generator",
        description="Generate sitemap.xml and robots.txt for a statically exported website.",
    )
    # Running without a sub-command behaves like `generate` with defaults
    parser.set_defaults(
        func=cmd_generate,
        config=None,
        build_dir=None,
        site_url=None,
        dry_run=False,
        no_validate=False,
        verbose=False,
    )

    subparsers = parser.add_subparsers(dest="command")

    # init
    p_init = subparsers.add_parser(
        "init", help=f"Create a starter {DEFAULT_CONFIG_NAME} in current directory."
    )
    p_init.add_argument(
        "-p",
        "--path",
        help=f"Config file path (default: {DEFAULT_CONFIG_NAME})",
    )
    p_init.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing config file.",
    )
    p_init.set_defaults(func=cmd_init)

    # generate
    p_gen = subparsers.add_parser(
        "generate",
        help="Generate sitemap.xml and, if missing, robots.txt in the build directory.",
    )
    _add_generate_arguments(p_gen)
    p_gen.set_defaults(func=cmd_generate)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1

    return int(func(args)) or 0


if __name__ == "__main__":
    raise SystemExit(main())
