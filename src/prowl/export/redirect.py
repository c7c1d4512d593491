"""Root entry page that sends visitors to the default locale."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prowl.export.writer import INDEX_FILE, ExportedFile, write_text

if TYPE_CHECKING:
    from pathlib import Path

    from prowl._types import Locale


def render_redirect(default_locale: Locale) -> str:
    """Return the redirect document for *default_locale*.

    The target is relative, so the page works at any deployment sub-path.

    """
    target = f"./{default_locale}/"
    return (
        "<!doctype html><meta charset='utf-8'>"
        f"<meta http-equiv='refresh' content='0; url={target}'>"
        f"<link rel='canonical' href='{target}'>"
    )


def write_root_redirect(output_dir: Path, default_locale: Locale) -> ExportedFile:
    """Write ``output_dir/index.html`` redirecting to *default_locale*."""
    t0 = time.perf_counter()
    filepath = output_dir / INDEX_FILE
    size = write_text(filepath, render_redirect(default_locale))
    return ExportedFile(
        source_path="/",
        output_path=filepath,
        source_type="redirect",
        locale="",
        size_bytes=size,
        duration_ms=(time.perf_counter() - t0) * 1000,
    )
