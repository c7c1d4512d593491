"""Route manifest loader.

Reads ``export-routes.json`` from the site root::

    {
      "cultures": ["zh-TW", "en-US"],
      "paths": ["/", "/News", "/Home/Privacy"]
    }

When the file is absent the export falls back to a single default locale
and the root route.  A file that is present but malformed is an error.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prowl._errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from prowl._types import Locale, RoutePath

DEFAULT_LOCALE: Locale = "zh-TW"


@dataclass(frozen=True, slots=True)
class RouteManifest:
    """Ordered locales and fixed routes to export.

    Attributes:
        locales: Locales in export order; the first is the default.
        paths: Fixed routes, each starting with ``/``.
        from_file: False when the built-in fallback was used.

    """

    locales: tuple[Locale, ...]
    paths: tuple[RoutePath, ...]
    from_file: bool = True

    @property
    def default_locale(self) -> Locale:
        return self.locales[0]


FALLBACK_MANIFEST = RouteManifest(locales=(DEFAULT_LOCALE,), paths=("/",), from_file=False)


class ManifestRouteSource:
    """Route source backed by an optional JSON manifest file."""

    __slots__ = ("_path",)

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> RouteManifest:
        return load_manifest(self._path)


def load_manifest(path: Path) -> RouteManifest:
    """Load the route manifest at *path*, or the fallback when it is missing.

    Entries keep their file order; repeated entries are dropped (first wins).
    Routes are not validated beyond the leading ``/``.

    Raises:
        ConfigError: If the file exists but is not a valid manifest.

    """
    if not path.is_file():
        return FALLBACK_MANIFEST

    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        msg = f"Route manifest {path} is not valid JSON: {exc}"
        raise ConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Route manifest {path} must be a JSON object"
        raise ConfigError(msg)

    locales = _string_list(data, "cultures", path)
    paths = _string_list(data, "paths", path)

    if not locales:
        msg = f"Route manifest {path} declares no cultures"
        raise ConfigError(msg)
    for route in paths:
        if not route.startswith("/"):
            msg = f"Route manifest {path}: path {route!r} must start with '/'"
            raise ConfigError(msg)

    return RouteManifest(locales=locales, paths=paths)


def _string_list(data: dict[str, object], key: str, path: Path) -> tuple[str, ...]:
    """Return ``data[key]`` as an order-preserving, de-duplicated tuple."""
    if key not in data:
        msg = f"Route manifest {path} is missing {key!r}"
        raise ConfigError(msg)
    values = data[key]
    if not isinstance(values, list):
        msg = f"Route manifest {path}: {key!r} must be a list"
        raise ConfigError(msg)
    for value in values:
        if not isinstance(value, str) or not value:
            msg = f"Route manifest {path}: {key!r} entries must be non-empty strings"
            raise ConfigError(msg)
    return tuple(dict.fromkeys(values))
