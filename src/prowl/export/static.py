"""Static export — crawl the running dynamic site into plain files.

Fetches every export target (fixed manifest routes plus published content
routes, once per locale) from the dynamic server, rewrites references for
the deployment sub-path, and writes the result as a clean-URL tree.  Static
assets are mirrored alongside and a root page redirects to the default
locale.

The run fails fast: the first fetch, rewrite or filesystem error stops it
and is re-raised.  Nothing already written is removed, and the root
redirect only appears once every page and asset is in place.
"""

from __future__ import annotations

import sys
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING

from prowl._errors import ExportCancelled, ProwlError, RewriteError
from prowl.export.assets import mirror_assets
from prowl.export.redirect import write_root_redirect
from prowl.export.rewriter import BasePathRewriter
from prowl.export.targets import ExportTarget, iter_targets
from prowl.export.writer import ExportedFile, OutputWriter
from prowl.observability.collector import ExportCollector
from prowl.observability.events import RewriteMissed, now_ns

if TYPE_CHECKING:
    from collections.abc import Iterable

    from prowl._types import ExportPhase, Locale
    from prowl.config import ProwlConfig
    from prowl.content.store import ContentRouteProvider
    from prowl.export.fetcher import PageFetcher
    from prowl.export.rewriter import MarkupRewriter
    from prowl.routes.manifest import ManifestRouteSource, RouteManifest
    from prowl.server import ServerHandle


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full static export.

    Attributes:
        files: All files written during export.
        total_pages: Number of pages fetched and written.
        total_assets: Number of static asset files copied.
        locales: Locales exported, in manifest order.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the output directory.
        rewrite_misses: Pages that had no reference to prefix for the
            sub-path, in the order they were written.

    """

    files: tuple[ExportedFile, ...]
    total_pages: int
    total_assets: int
    locales: tuple[Locale, ...]
    duration_ms: float
    output_dir: Path
    rewrite_misses: tuple[RewriteMissed, ...] = ()


class StaticExporter:
    """Exports a running dynamic site as static files.

    Phases, in order::

        idle -> routes_loaded
             -> fixed_routes -> content_routes     (per locale)
             -> assets_mirrored -> root_written -> done

    with ``failed`` reachable from any step.  Each transition is recorded as
    a ``PhaseEntered`` event.

    With ``config.workers > 1`` targets are fetched by a bounded thread pool
    that pulls them lazily; each target is still fetched and written exactly
    once.

    Args:
        config: Frozen Prowl configuration.
        routes: Source of locales and fixed routes.
        content: Source of published slugs per locale.
        fetcher: Page fetcher bound to the dynamic server.
        rewriter: Sub-path rewriter (defaults to ``BasePathRewriter``).
        writer: Output writer (defaults to one rooted at ``config.output_path``).
        collector: Event collector.
        quiet: Suppress per-page progress lines on stderr.

    """

    def __init__(
        self,
        config: ProwlConfig,
        *,
        routes: ManifestRouteSource,
        content: ContentRouteProvider,
        fetcher: PageFetcher,
        rewriter: MarkupRewriter | None = None,
        writer: OutputWriter | None = None,
        collector: ExportCollector | None = None,
        quiet: bool = False,
    ) -> None:
        self._config = config
        self._routes = routes
        self._content = content
        self._fetcher = fetcher
        self._rewriter = rewriter or BasePathRewriter(config.assets_dir)
        self._writer = writer or OutputWriter(config.output_path)
        self._collector = collector or ExportCollector()
        self._quiet = quiet
        self._phase: ExportPhase = "idle"
        self._lock = threading.Lock()

    @property
    def phase(self) -> ExportPhase:
        """Current phase of the most recent run."""
        return self._phase

    @property
    def collector(self) -> ExportCollector:
        return self._collector

    def export(
        self,
        server: ServerHandle,
        cancel: threading.Event | None = None,
    ) -> ExportResult:
        """Run the full export against *server* and return the result.

        Args:
            server: Handle of the running dynamic server.
            cancel: When set, no further fetches are started; fetches in
                flight finish and the run raises ``ExportCancelled``.

        Raises:
            ExportError: If a page cannot be fetched, rewritten or mapped.
            ConfigError: If the route manifest is malformed.
            ContentError: If the content store cannot be queried.
            OSError: If the output tree cannot be written.

        """
        start = time.perf_counter()
        start_ns = now_ns()
        output_dir = self._writer.output_dir
        self._phase = "idle"
        step = "routes"

        try:
            manifest = self._routes.load()
            if not manifest.from_file and not self._quiet:
                print(
                    f"  ! No route manifest, exporting / in {manifest.default_locale}",
                    file=sys.stderr,
                )
            self._enter("routes_loaded")

            step = "pages"
            pages = self._export_pages(server.base_url, manifest, cancel)

            step = "assets"
            assets = mirror_assets(
                self._config.assets_path,
                output_dir / self._config.assets_dir,
            )
            self._record_files(assets)
            self._enter("assets_mirrored")

            step = "redirect"
            default_locale = self._config.default_locale or manifest.default_locale
            redirect = write_root_redirect(output_dir, default_locale)
            self._record_files((redirect,))
            self._enter("root_written")
        except (ProwlError, OSError) as exc:
            self._fail(step, exc)
            raise

        self._enter("done")
        all_files = (*pages, *assets, redirect)
        misses = tuple(
            event
            for event in reversed(self._collector.log.query(since_ns=start_ns))
            if isinstance(event, RewriteMissed)
        )

        return ExportResult(
            files=all_files,
            total_pages=len(pages),
            total_assets=len(assets),
            locales=manifest.locales,
            duration_ms=(time.perf_counter() - start) * 1000,
            output_dir=output_dir,
            rewrite_misses=misses,
        )

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def _export_pages(
        self,
        base_url: str,
        manifest: RouteManifest,
        cancel: threading.Event | None,
    ) -> list[ExportedFile]:
        targets = iter_targets(
            manifest,
            self._content,
            detail_route=self._config.detail_route,
            on_phase=self._enter,
        )
        if self._config.workers == 1:
            files: list[ExportedFile] = []
            for target in targets:
                _check_cancelled(cancel)
                files.append(self._export_target(base_url, target))
            return files
        return self._export_parallel(base_url, targets, cancel)

    def _export_parallel(
        self,
        base_url: str,
        targets: Iterable[ExportTarget],
        cancel: threading.Event | None,
    ) -> list[ExportedFile]:
        """Fetch targets on a thread pool, keeping at most ``2 * workers`` in flight.

        A new target is pulled as soon as any in-flight one finishes.
        """
        workers = self._config.workers
        files: list[ExportedFile] = []

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="prowl-fetch") as pool:
            pending: set[Future[ExportedFile]] = set()
            try:
                for target in targets:
                    _check_cancelled(cancel)
                    if self._phase == "failed":
                        break
                    pending.add(pool.submit(self._export_target, base_url, target))
                    if len(pending) >= workers * 2:
                        done, pending = wait(pending, return_when=FIRST_COMPLETED)
                        files.extend(future.result() for future in done)
            finally:
                # In-flight fetches always run to completion
                done, pending = wait(pending)
            files.extend(future.result() for future in done)

        return files

    def _export_target(self, base_url: str, target: ExportTarget) -> ExportedFile:
        """Fetch, rewrite and write one target."""
        t0 = time.perf_counter()
        try:
            markup = self._fetcher.fetch(base_url, target.route, target.locale)
            markup = self._rewrite(markup, target)
            exported = self._writer.write(target.locale, target.route, markup)
        except (ProwlError, OSError) as exc:
            self._fail(target.route, exc, locale=target.locale)
            raise

        exported = replace(exported, duration_ms=(time.perf_counter() - t0) * 1000)
        self._record_files((exported,))
        if not self._quiet:
            relative = exported.output_path.relative_to(self._writer.output_dir)
            print(
                f"  {target.locale} {target.route} -> {relative.as_posix()}",
                file=sys.stderr,
            )
        return exported

    def _rewrite(self, markup: str, target: ExportTarget) -> str:
        sub_path = self._config.sub_path
        rewritten = self._rewriter.rewrite(markup, sub_path, target.locale)
        if sub_path and rewritten == markup:
            self._collector.record_rewrite_miss(target.locale, target.route, sub_path)
            msg = (
                f"{target.locale} {target.route}: no base or asset reference "
                f"found to prefix with {sub_path!r}"
            )
            if self._config.strict_rewrite:
                raise RewriteError(msg)
            print(f"  ! {msg}", file=sys.stderr)
        return rewritten

    # ------------------------------------------------------------------
    # State and events
    # ------------------------------------------------------------------

    def _enter(self, phase: ExportPhase, locale: Locale | None = None) -> None:
        with self._lock:
            if self._phase == "failed":
                return
            self._phase = phase
        self._collector.record_phase(phase, locale=locale)

    def _fail(self, source: str, exc: BaseException, *, locale: Locale | None = None) -> None:
        """Record the first failure of the run; later ones are ignored."""
        with self._lock:
            if self._phase == "failed":
                return
            phase = self._phase
            self._phase = "failed"
        self._collector.record_failure(phase, source, exc, locale=locale)
        self._collector.record_phase("failed")

    def _record_files(self, files: Iterable[ExportedFile]) -> None:
        for exported in files:
            self._collector.record_build(
                exported.source_type,
                exported.source_path,
                str(exported.output_path),
                locale=exported.locale,
                size_bytes=exported.size_bytes,
                duration_ms=exported.duration_ms,
            )


def _check_cancelled(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        msg = "Export cancelled before all pages were written"
        raise ExportCancelled(msg)
