"""Output writer — map export targets to files and persist them.

Clean URL convention, one tree per locale:

    ``("en-US", "/")``                          -> ``en-US/index.html``
    ``("zh-TW", "/News/Detail/site-launched")`` -> ``zh-TW/News/Detail/site-launched/index.html``
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from prowl._errors import ExportError

if TYPE_CHECKING:
    from prowl._types import FileKind, Locale, RoutePath

INDEX_FILE = "index.html"


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical source (route, asset path or ``"/"`` for the redirect).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        locale: Locale of a page; empty for assets and the root redirect.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to produce and write this file.

    """

    source_path: str
    output_path: Path
    source_type: FileKind
    locale: str
    size_bytes: int
    duration_ms: float


def route_segments(route: RoutePath) -> tuple[str, ...]:
    """Split *route* into output directory segments.

    The query string is ignored, leading and trailing slashes are trimmed,
    and the root route has no segments.

    Raises:
        ExportError: If a segment is empty, ``.`` or ``..``, which would make
            the output escape or collide within the locale directory.

    """
    path = route.split("?", 1)[0]
    clean = path.strip("/")
    if not clean:
        return ()
    segments = tuple(clean.split("/"))
    for segment in segments:
        if segment in ("", ".", "..") or "\\" in segment:
            msg = f"Route {route!r} cannot be mapped to an output path"
            raise ExportError(msg)
    return segments


def route_to_filepath(route: RoutePath, locale: Locale, output_dir: Path) -> Path:
    """Return the index file an export target is written to."""
    return output_dir.joinpath(locale, *route_segments(route), INDEX_FILE)


class OutputWriter:
    """Writes fetched pages into the export tree.

    Directory creation tolerates existing directories and concurrent callers;
    existing files are overwritten, so re-running a target is idempotent.

    Args:
        output_dir: Export root.

    """

    __slots__ = ("_output_dir",)

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def filepath(self, locale: Locale, route: RoutePath) -> Path:
        return route_to_filepath(route, locale, self._output_dir)

    def write(self, locale: Locale, route: RoutePath, content: str) -> ExportedFile:
        """Write *content* as the index document for ``(locale, route)``."""
        t0 = time.perf_counter()
        filepath = self.filepath(locale, route)
        size = write_text(filepath, content)
        return ExportedFile(
            source_path=route,
            output_path=filepath,
            source_type="page",
            locale=locale,
            size_bytes=size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        )


def write_text(filepath: Path, text: str) -> int:
    """Write UTF-8 text to a file, creating parent dirs as needed.

    Returns the size in bytes of the written file.

    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    data = text.encode("utf-8")
    filepath.write_bytes(data)
    return len(data)
