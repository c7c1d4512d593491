"""Tests for prowl.export.targets — lazy, de-duplicated export targets."""

from __future__ import annotations

import pytest

from prowl._errors import ExportError
from prowl.content import ContentItem, MemoryContentStore
from prowl.export.targets import ExportTarget, iter_targets
from prowl.routes.manifest import RouteManifest


class _CountingStore(MemoryContentStore):
    """MemoryContentStore that records which locales were queried."""

    __slots__ = ("queried",)

    def __init__(self, items: list[ContentItem]) -> None:
        super().__init__(items)
        self.queried: list[str] = []

    def slugs_for(self, locale: str) -> frozenset[str]:
        self.queried.append(locale)
        return super().slugs_for(locale)


MANIFEST = RouteManifest(locales=("zh-TW", "en-US"), paths=("/", "/News"))
STORE_ITEMS = [
    ContentItem("zh-TW", "site-launched"),
    ContentItem("en-US", "site-launched"),
    ContentItem("en-US", "hello-world"),
]


class TestIterTargets:
    """iter_targets — ordering, kinds and completeness."""

    def test_order_and_kinds(self) -> None:
        targets = list(iter_targets(MANIFEST, MemoryContentStore(STORE_ITEMS)))
        assert targets == [
            ExportTarget("zh-TW", "/", "fixed"),
            ExportTarget("zh-TW", "/News", "fixed"),
            ExportTarget("zh-TW", "/News/Detail/site-launched", "content"),
            ExportTarget("en-US", "/", "fixed"),
            ExportTarget("en-US", "/News", "fixed"),
            ExportTarget("en-US", "/News/Detail/hello-world", "content"),
            ExportTarget("en-US", "/News/Detail/site-launched", "content"),
        ]

    def test_lazy_content_queries(self) -> None:
        store = _CountingStore(STORE_ITEMS)
        targets = iter_targets(MANIFEST, store)

        assert store.queried == []
        for _ in range(3):
            next(targets)
        assert store.queried == ["zh-TW"]

    def test_phase_callbacks(self) -> None:
        phases: list[tuple[str, str]] = []
        list(iter_targets(
            MANIFEST,
            MemoryContentStore(STORE_ITEMS),
            on_phase=lambda phase, locale: phases.append((phase, locale)),
        ))
        assert phases == [
            ("fixed_routes", "zh-TW"),
            ("content_routes", "zh-TW"),
            ("fixed_routes", "en-US"),
            ("content_routes", "en-US"),
        ]

    def test_custom_detail_route(self) -> None:
        manifest = RouteManifest(locales=("en-US",), paths=())
        targets = list(iter_targets(
            manifest,
            MemoryContentStore([ContentItem("en-US", "a")]),
            detail_route="/posts/{slug}",
        ))
        assert targets == [ExportTarget("en-US", "/posts/a", "content")]


class TestDeduplication:
    """Each output file is claimed by exactly one route."""

    def test_fixed_route_repeated_as_content(self) -> None:
        manifest = RouteManifest(
            locales=("en-US",), paths=("/", "/News/Detail/hello-world"),
        )
        targets = list(iter_targets(
            manifest, MemoryContentStore([ContentItem("en-US", "hello-world")]),
        ))
        assert targets == [
            ExportTarget("en-US", "/", "fixed"),
            ExportTarget("en-US", "/News/Detail/hello-world", "fixed"),
        ]

    def test_trailing_slash_spelling_is_same_route(self) -> None:
        manifest = RouteManifest(locales=("en-US",), paths=("/News", "/News/"))
        targets = list(iter_targets(manifest, MemoryContentStore()))
        assert [t.route for t in targets] == ["/News"]

    def test_same_route_in_two_locales(self) -> None:
        targets = list(iter_targets(MANIFEST, MemoryContentStore()))
        assert len(targets) == 4

    def test_query_collision_rejected(self) -> None:
        manifest = RouteManifest(locales=("en-US",), paths=("/News", "/News?page=2"))
        targets = iter_targets(manifest, MemoryContentStore())
        assert next(targets).route == "/News"
        with pytest.raises(ExportError, match="both export to en-US/News/index.html"):
            next(targets)

    def test_unmappable_route(self) -> None:
        manifest = RouteManifest(locales=("en-US",), paths=("/../secret",))
        with pytest.raises(ExportError):
            list(iter_targets(manifest, MemoryContentStore()))
