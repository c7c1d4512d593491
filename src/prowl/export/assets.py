"""Asset mirroring — copy the static asset tree into the export.

Copies every file under the source directory, at any depth, preserving the
relative layout.  Existing destination files are overwritten; destination
files with no source counterpart are left alone.
"""

from __future__ import annotations

import shutil
import time
from typing import TYPE_CHECKING

from prowl.export.writer import ExportedFile

if TYPE_CHECKING:
    from pathlib import Path


def mirror_assets(source_dir: Path, dest_dir: Path) -> tuple[ExportedFile, ...]:
    """Recursively copy *source_dir* into *dest_dir*.

    Args:
        source_dir: Asset source (e.g., ``site_root/wwwroot/``).
        dest_dir: Destination inside the export (e.g., ``dist-static/wwwroot/``).

    Returns:
        Tuple of :class:`ExportedFile` entries, one per copied file.  Empty
        when the source directory does not exist.

    """
    if not source_dir.is_dir():
        return ()

    dest_dir.mkdir(parents=True, exist_ok=True)
    mount = dest_dir.name
    results: list[ExportedFile] = []

    for src_file in sorted(source_dir.rglob("*")):
        if not src_file.is_file():
            continue

        t0 = time.perf_counter()

        relative = src_file.relative_to(source_dir)
        dest_file = dest_dir / relative
        dest_file.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_file, dest_file)

        results.append(ExportedFile(
            source_path=f"/{mount}/{relative.as_posix()}",
            output_path=dest_file,
            source_type="asset",
            locale="",
            size_bytes=dest_file.stat().st_size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        ))

    return tuple(results)
