"""Shared type definitions for prowl."""

from typing import Literal

# Opaque locale identifier (e.g., "zh-TW", "en-US")
type Locale = str

# Route path on the dynamic server (e.g., "/", "/News/Detail/site-launched")
type RoutePath = str

# Content identifier of a news item, unique per locale
type Slug = str

# Where an export target came from
type TargetKind = Literal["fixed", "content"]

# What an exported file is
type FileKind = Literal["page", "asset", "redirect"]

# Exporter state machine
type ExportPhase = Literal[
    "idle",
    "routes_loaded",
    "fixed_routes",
    "content_routes",
    "assets_mirrored",
    "root_written",
    "done",
    "failed",
]
