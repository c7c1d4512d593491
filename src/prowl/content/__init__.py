"""Content layer — published news slugs that become detail routes.

The content store is owned by the dynamic site; prowl only reads it.
"""

from prowl.content.store import (
    ContentItem,
    ContentRouteProvider,
    MemoryContentStore,
    SqliteContentStore,
    content_routes,
)

__all__ = [
    "ContentItem",
    "ContentRouteProvider",
    "MemoryContentStore",
    "SqliteContentStore",
    "content_routes",
]
