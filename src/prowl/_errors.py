"""Prowl error hierarchy.

All prowl-specific errors inherit from ProwlError for easy catching.
"""


class ProwlError(Exception):
    """Base error for all prowl operations."""


class ConfigError(ProwlError):
    """Invalid configuration or route manifest."""


class ContentError(ProwlError):
    """The content store could not be queried."""


class ServerError(ProwlError):
    """The dynamic server could not be started."""


class ExportError(ProwlError):
    """Error during static export."""


class FetchError(ExportError):
    """A page could not be fetched from the dynamic server.

    The underlying ``httpx`` error is available as ``__cause__``.
    """

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class RewriteError(ExportError):
    """A sub-path is configured but the markup held nothing to rewrite."""


class ExportCancelled(ExportError):
    """The export run was cancelled before all targets were written."""
