"""Prowl application — wires the export components and runs them.

``build()`` is the primary entry point: it loads configuration, brings up
(or attaches to) the dynamic server, crawls it into the output directory,
and shuts the server down again.  There is no export-and-keep-serving mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from prowl.config_loader import load_config

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping

    from prowl.config import ProwlConfig
    from prowl.export.static import ExportResult
    from prowl.server import ServerLauncher


def create_launcher(config: ProwlConfig) -> ServerLauncher:
    """Return the launcher for the configured dynamic server."""
    from prowl.server import CommandServer, ExternalServer

    if config.server_command:
        return CommandServer(
            config.server_command,
            config.base_url,
            cwd=config.root,
            startup_timeout=config.startup_timeout,
        )
    return ExternalServer(config.base_url)


def build(
    root: str | Path = ".",
    *,
    env: Mapping[str, str] | None = None,
    cancel: threading.Event | None = None,
    quiet: bool = False,
    **kwargs: object,
) -> ExportResult:
    """Export the dynamic site as a static mirror.

    Args:
        root: Site content root (manifest, assets, database).
        env: Environment to read ``BASE_PATH`` / ``DEFAULT_CULTURE`` from;
            defaults to ``os.environ``.
        cancel: Event that stops the run before the next fetch when set.
        quiet: Suppress banner, progress and summary output.
        **kwargs: Override ProwlConfig fields.

    Returns:
        The ExportResult of the completed run.

    Raises:
        ProwlError: If configuration, the server, or any export step fails.
        OSError: If the output tree cannot be written.

    """
    from prowl.banner import print_banner, print_summary
    from prowl.content.store import SqliteContentStore
    from prowl.export.fetcher import PageFetcher
    from prowl.export.static import StaticExporter
    from prowl.routes.manifest import ManifestRouteSource
    from prowl.server import run_export

    config = load_config(Path(root), env=env, **kwargs)
    launcher = create_launcher(config)

    if not quiet:
        print_banner(config)

    with PageFetcher(timeout=config.timeout) as fetcher:
        exporter = StaticExporter(
            config,
            routes=ManifestRouteSource(config.manifest_path),
            content=SqliteContentStore(config.database_path),
            fetcher=fetcher,
            quiet=quiet,
        )
        result = run_export(launcher, exporter, cancel)

    if not quiet:
        print_summary(result)
    return result

