"""Route discovery — the fixed half of the export route set.

The route manifest declares the locales to export and the locale-independent
routes rendered for each of them.  Content routes come from
:mod:`prowl.content`.
"""

from prowl.routes.manifest import (
    DEFAULT_LOCALE,
    ManifestRouteSource,
    RouteManifest,
    load_manifest,
)

__all__ = ["DEFAULT_LOCALE", "ManifestRouteSource", "RouteManifest", "load_manifest"]
