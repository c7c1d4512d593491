"""Shared test fixtures for prowl."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from prowl.config import ProwlConfig
from prowl.content.store import SqliteContentStore
from prowl.export.fetcher import PageFetcher
from prowl.export.static import StaticExporter
from prowl.observability import EventLog, ExportCollector
from prowl.routes.manifest import ManifestRouteSource

# Published (locale, slug) pairs seeded into the test database
PUBLISHED = {
    ("zh-TW", "site-launched"),
    ("en-US", "site-launched"),
    ("en-US", "hello-world"),
}


def render_page(path: str, culture: str) -> str:
    """Markup shaped like the site's layout template."""
    return (
        "<!DOCTYPE html><html><head>"
        f'<base href="/{culture}/">'
        '<link rel="stylesheet" href="/wwwroot/css/site.css">'
        "</head><body>"
        f"<h1>{culture} {path}</h1>"
        '<script src="/wwwroot/js/site.js"></script>'
        "</body></html>"
    )


class FakeSite:
    """Stand-in for the dynamic server, served through ``httpx.MockTransport``.

    Records every request and answers detail routes only for published
    slugs.  ``failures`` maps a path to the status code it should return.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.URL] = []
        self.failures: dict[str, int] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url)
        path = request.url.path
        culture = request.url.params.get("culture", "zh-TW")

        if path in self.failures:
            return httpx.Response(self.failures[path], text="boom")

        if path.startswith("/News/Detail/"):
            slug = path.rsplit("/", 1)[-1]
            if (culture, slug) not in PUBLISHED:
                return httpx.Response(404, text="not found")

        return httpx.Response(
            200,
            text=render_page(path, culture),
            headers={"content-type": "text/html; charset=utf-8"},
        )


def create_news_db(path: Path, rows: list[tuple[str, str, int]]) -> None:
    """Create a News table shaped like the site's and insert (lang, slug, published) rows."""
    conn = sqlite3.connect(path)
    try:
        conn.execute(
            'CREATE TABLE "News" ('
            '"Id" INTEGER PRIMARY KEY AUTOINCREMENT, '
            '"Lang" TEXT NOT NULL, "Title" TEXT NOT NULL DEFAULT \'\', '
            '"Slug" TEXT NOT NULL, "Html" TEXT NOT NULL DEFAULT \'\', '
            '"IsPublished" INTEGER NOT NULL, "CreatedAt" TEXT NOT NULL DEFAULT \'\')'
        )
        conn.executemany(
            'INSERT INTO "News" ("Lang", "Slug", "IsPublished") VALUES (?, ?, ?)',
            rows,
        )
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a site root with a manifest, assets and a seeded content database."""
    root = tmp_path / "WebApp"
    root.mkdir()

    (root / "export-routes.json").write_text(
        json.dumps({"cultures": ["zh-TW", "en-US"], "paths": ["/", "/News"]}),
        encoding="utf-8",
    )

    wwwroot = root / "wwwroot"
    (wwwroot / "css").mkdir(parents=True)
    (wwwroot / "js").mkdir()
    (wwwroot / "css" / "site.css").write_text("body { margin: 0; }\n")
    (wwwroot / "js" / "site.js").write_text("console.log('site');\n")

    create_news_db(root / "app.db", [
        ("zh-TW", "site-launched", 1),
        ("en-US", "site-launched", 1),
        ("en-US", "hello-world", 1),
        # Same slug twice in one locale, and an unpublished draft
        ("en-US", "hello-world", 1),
        ("en-US", "draft-post", 0),
    ])

    return root


@pytest.fixture
def news_db() -> Callable[[Path, list[tuple[str, str, int]]], None]:
    return create_news_db


@pytest.fixture
def fake_site() -> FakeSite:
    return FakeSite()


@pytest.fixture
def make_exporter(
    fake_site: FakeSite,
) -> Callable[..., StaticExporter]:
    """Factory for a StaticExporter wired to the fake site."""

    def _make(
        root: Path,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        quiet: bool = True,
        **overrides: object,
    ) -> StaticExporter:
        config = ProwlConfig(root=root, **overrides)  # type: ignore[arg-type]
        transport = httpx.MockTransport(handler or fake_site)
        return StaticExporter(
            config,
            routes=ManifestRouteSource(config.manifest_path),
            content=SqliteContentStore(config.database_path),
            fetcher=PageFetcher(client=httpx.Client(transport=transport)),
            collector=ExportCollector(EventLog()),
            quiet=quiet,
        )

    return _make
