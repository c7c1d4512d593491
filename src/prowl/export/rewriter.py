"""Markup rewriting for sub-path deployments.

The rendering layer emits root-relative references.  When the export is
served from a sub-path (``/HybridWeb``), two kinds of reference need the
prefix:

    <base href="/en-US/">        ->  <base href="/HybridWeb/en-US/">
    href="/wwwroot/site.css"     ->  href="/HybridWeb/wwwroot/site.css"
    src="/wwwroot/js/site.js"    ->  src="/HybridWeb/wwwroot/js/site.js"

These are literal substitutions, not an HTML parse: markup that spells the
references any other way is left untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from prowl._types import Locale


class MarkupRewriter(Protocol):
    """Rewrites fetched markup for the deployment sub-path."""

    def rewrite(self, markup: str, sub_path: str, locale: Locale) -> str: ...


class BasePathRewriter:
    """Literal base-tag and asset-reference rewriter.

    Args:
        asset_mount: URL segment the static assets are served under.

    """

    __slots__ = ("_asset_mount",)

    def __init__(self, asset_mount: str = "wwwroot") -> None:
        self._asset_mount = asset_mount.strip("/")

    def replacements(self, sub_path: str, locale: Locale) -> tuple[tuple[str, str], ...]:
        """Return the ``(needle, replacement)`` pairs applied for *locale*."""
        mount = self._asset_mount
        return (
            (f'<base href="/{locale}/">', f'<base href="{sub_path}/{locale}/">'),
            (f'href="/{mount}/', f'href="{sub_path}/{mount}/'),
            (f'src="/{mount}/', f'src="{sub_path}/{mount}/'),
        )

    def rewrite(self, markup: str, sub_path: str, locale: Locale) -> str:
        if not sub_path:
            return markup
        for needle, replacement in self.replacements(sub_path, locale):
            markup = markup.replace(needle, replacement)
        return markup
