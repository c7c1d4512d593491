"""Prowl — static export for multi-locale dynamic sites.

Crawls a running site once per locale and writes a clean-URL file tree
that any static host can serve, optionally from a sub-path.

Quick start::

    import prowl

    prowl.build("WebApp/", base_url="http://localhost:5055", sub_path="/HybridWeb")

Output layout::

    dist-static/index.html                              redirect to the default locale
    dist-static/{locale}/index.html                     locale root
    dist-static/{locale}/News/Detail/{slug}/index.html  every other route
    dist-static/wwwroot/**                              mirrored assets

"""

__version__ = "0.1.0-dev"
__all__ = [
    "ProwlConfig",
    "__version__",
    "build",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import prowl`` fast while providing a clean top-level API.
    """
    if name == "ProwlConfig":
        from prowl.config import ProwlConfig

        return ProwlConfig

    if name == "build":
        from prowl.app import build

        return build

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
