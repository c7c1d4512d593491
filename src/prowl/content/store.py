"""Content route providers.

A provider answers one question: which slugs are published for a locale.
Each slug becomes one detail route per locale, so results are de-duplicated
here and never paginated or limited.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from prowl._errors import ContentError

if TYPE_CHECKING:
    from pathlib import Path

    from prowl._types import Locale, RoutePath, Slug


@dataclass(frozen=True, slots=True)
class ContentItem:
    """A news item as seen by the exporter.

    Attributes:
        locale: Locale the item is written in.
        slug: URL identifier, unique within a locale.
        published: Only published items are exported.

    """

    locale: Locale
    slug: Slug
    published: bool = True


class ContentRouteProvider(Protocol):
    """Source of published slugs, queried once per locale per run."""

    def slugs_for(self, locale: Locale) -> frozenset[Slug]: ...


class MemoryContentStore:
    """Provider over an in-memory collection of content items."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[ContentItem] = ()) -> None:
        self._items = tuple(items)

    def slugs_for(self, locale: Locale) -> frozenset[Slug]:
        return frozenset(
            item.slug for item in self._items
            if item.published and item.locale == locale
        )


class SqliteContentStore:
    """Provider reading the site's SQLite ``News`` table.

    Opens the database read-only for each query.  A database file that does
    not exist yet holds no content, so it yields no slugs.

    Args:
        path: SQLite database file.
        table: Table holding the news items.

    """

    __slots__ = ("_path", "_table")

    _QUERY = (
        'SELECT DISTINCT "Slug" FROM "{table}" '
        'WHERE "IsPublished" = 1 AND "Lang" = ?'
    )

    def __init__(self, path: Path, table: str = "News") -> None:
        self._path = path
        self._table = table

    def slugs_for(self, locale: Locale) -> frozenset[Slug]:
        """Return distinct published slugs for *locale*.

        Raises:
            ContentError: If the database cannot be read or lacks the table.

        """
        if not self._path.is_file():
            return frozenset()

        query = self._QUERY.format(table=self._table.replace('"', '""'))
        uri = f"{self._path.resolve().as_uri()}?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as exc:
            msg = f"Cannot open content database {self._path}: {exc}"
            raise ContentError(msg) from exc
        try:
            rows = conn.execute(query, (locale,)).fetchall()
        except sqlite3.Error as exc:
            msg = f"Content query failed for locale {locale!r} in {self._path}: {exc}"
            raise ContentError(msg) from exc
        finally:
            conn.close()
        return frozenset(str(row[0]) for row in rows if row[0])


def content_routes(
    provider: ContentRouteProvider,
    locale: Locale,
    template: str = "/News/Detail/{slug}",
) -> tuple[RoutePath, ...]:
    """Derive detail routes for *locale*, sorted by slug for stable ordering."""
    return tuple(template.format(slug=slug) for slug in sorted(provider.slugs_for(locale)))
