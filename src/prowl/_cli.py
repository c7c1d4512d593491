"""Prowl CLI — prowl build.

Entry point for the ``prowl`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the prowl CLI."""
    parser = argparse.ArgumentParser(
        prog="prowl",
        description="Export a running multi-locale site as static files.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # prowl build
    build_parser = subparsers.add_parser(
        "build",
        help="Crawl the dynamic site into a static mirror",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Site content root")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument("--base-url", default=None, help="URL of the dynamic server")
    build_parser.add_argument(
        "--sub-path", default=None, help="Deployment sub-path (overrides BASE_PATH)",
    )
    build_parser.add_argument(
        "--default-locale", default=None,
        help="Locale the root page redirects to (overrides DEFAULT_CULTURE)",
    )
    build_parser.add_argument("--workers", type=int, default=None, help="Fetch worker count")
    build_parser.add_argument(
        "--timeout", type=float, default=None, help="Per-request timeout in seconds",
    )
    build_parser.add_argument(
        "--strict-rewrite", action="store_true", default=None,
        help="Fail when a page has nothing to rewrite for the sub-path",
    )
    build_parser.add_argument(
        "--server-command", default=None,
        help="Command that starts the dynamic server for the run",
    )
    build_parser.add_argument("--quiet", action="store_true", help="Only print errors")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from prowl import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from prowl._errors import ProwlError
    from prowl.app import build
    from prowl.banner import print_error

    if args.command == "build":
        try:
            build(
                root=args.root,
                quiet=args.quiet,
                output=args.output,
                base_url=args.base_url,
                sub_path=args.sub_path,
                default_locale=args.default_locale,
                workers=args.workers,
                timeout=args.timeout,
                strict_rewrite=args.strict_rewrite,
                server_command=args.server_command,
            )
        except (ProwlError, OSError) as exc:
            print_error(exc)
            sys.exit(1)


if __name__ == "__main__":
    main()
