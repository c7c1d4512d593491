"""Export targets — the (locale, route) units of fetch-and-write work.

Targets are produced lazily: for each locale, the manifest's fixed routes
first, then the content routes, whose provider is only queried once that
locale is reached.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prowl._errors import ExportError
from prowl.content.store import content_routes
from prowl.export.writer import route_segments

if TYPE_CHECKING:
    from prowl._types import ExportPhase, Locale, RoutePath, TargetKind
    from prowl.content.store import ContentRouteProvider
    from prowl.routes.manifest import RouteManifest


@dataclass(frozen=True, slots=True)
class ExportTarget:
    """One page to fetch and write.

    Attributes:
        locale: Locale the page is requested in.
        route: Route on the dynamic server.
        kind: ``"fixed"`` for manifest routes, ``"content"`` for detail routes.

    """

    locale: Locale
    route: RoutePath
    kind: TargetKind


def _route_identity(route: RoutePath) -> str:
    """Normalise *route* so spellings that differ only in slashes compare equal."""
    query = route.split("?", 1)[1] if "?" in route else ""
    path = "/".join(route_segments(route))
    return f"/{path}?{query}" if query else f"/{path}"


def iter_targets(
    manifest: RouteManifest,
    provider: ContentRouteProvider,
    *,
    detail_route: str = "/News/Detail/{slug}",
    on_phase: Callable[[ExportPhase, Locale], None] | None = None,
) -> Iterator[ExportTarget]:
    """Yield every export target of a run exactly once.

    A route that reaches an output file already claimed by the same route
    (a fixed route repeated as a content route, a slug returned twice) is
    skipped.  Two different routes that would write the same file are an
    error.

    Args:
        manifest: Locales and fixed routes.
        provider: Published slugs per locale.
        detail_route: Content route template.
        on_phase: Called with ``("fixed_routes" | "content_routes", locale)``
            as the generator moves through each locale.

    Raises:
        ExportError: On an output path collision or an unmappable route.

    """
    claimed: dict[tuple[Locale, tuple[str, ...]], str] = {}

    def claim(target: ExportTarget) -> bool:
        key = (target.locale, route_segments(target.route))
        identity = _route_identity(target.route)
        previous = claimed.get(key)
        if previous is None:
            claimed[key] = identity
            return True
        if previous != identity:
            msg = (
                f"Routes {previous!r} and {target.route!r} both export to "
                f"{'/'.join((target.locale, *key[1]))}/index.html"
            )
            raise ExportError(msg)
        return False

    for locale in manifest.locales:
        if on_phase is not None:
            on_phase("fixed_routes", locale)
        for route in manifest.paths:
            target = ExportTarget(locale=locale, route=route, kind="fixed")
            if claim(target):
                yield target

        if on_phase is not None:
            on_phase("content_routes", locale)
        for route in content_routes(provider, locale, detail_route):
            target = ExportTarget(locale=locale, route=route, kind="content")
            if claim(target):
                yield target
