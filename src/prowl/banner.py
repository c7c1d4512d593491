"""Startup banner — status output before an export run.

Prints a branded banner summarising where the export reads from and writes
to.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prowl.config import ProwlConfig
    from prowl.export.static import ExportResult


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""
_ORANGE = "\033[38;5;214m" if _COLOR else ""


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(config: ProwlConfig, *, warnings: list[str] | None = None) -> None:
    """Print the Prowl startup banner to stderr.

    Args:
        config: Resolved ProwlConfig.
        warnings: Optional list of warning messages to display.

    """
    from prowl import __version__

    cat = "\u14DA\u1618\u14E2"  # ᓚᘘᓢ
    header = (
        f"  {_ORANGE}{_BOLD}{cat}{_RESET}  Prowl {_DIM}v{__version__}{_RESET}  "
        f"{_YELLOW}[export]{_RESET}"
    )

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    if config.server_command:
        server = f"{' '.join(config.server_command)} {_DIM}@ {config.base_url}{_RESET}"
    else:
        server = config.base_url
    lines.append(f"  {_DIM}├─{_RESET} server: {server}")

    lines.append(f"  {_DIM}├─{_RESET} routes: {_DIM}{config.manifest_path}{_RESET}")

    if config.sub_path:
        lines.append(f"  {_DIM}├─{_RESET} sub-path: {config.sub_path}")

    if config.workers > 1:
        lines.append(f"  {_DIM}├─{_RESET} workers: {config.workers}")

    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def print_summary(result: ExportResult) -> None:
    """Print export completion summary to stderr."""
    lines = [
        "",
        "─" * 41,
        f"  {_GREEN}Exported{_RESET} {_plural(result.total_pages, 'page')} "
        f"in {_plural(len(result.locales), 'locale')}",
    ]
    if result.total_assets > 0:
        lines.append(f"  Copied {_plural(result.total_assets, 'asset')}")
    if result.rewrite_misses:
        lines.append(
            f"  {_YELLOW}!{_RESET} {_plural(len(result.rewrite_misses), 'page')} "
            "kept root-relative references",
        )
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)


def print_error(exc: BaseException) -> None:
    """Print a fatal error to stderr."""
    print(f"\n  {_RED}error:{_RESET} {exc}", file=sys.stderr)
