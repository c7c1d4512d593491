"""Tests for prowl._errors — error hierarchy."""

from __future__ import annotations

import pytest

from prowl._errors import (
    ConfigError,
    ContentError,
    ExportCancelled,
    ExportError,
    FetchError,
    ProwlError,
    RewriteError,
    ServerError,
)


class TestErrorHierarchy:
    """All prowl errors inherit from ProwlError."""

    @pytest.mark.parametrize(
        "cls",
        [ConfigError, ContentError, ServerError, ExportError, RewriteError, ExportCancelled],
    )
    def test_is_prowl_error(self, cls: type[ProwlError]) -> None:
        assert issubclass(cls, ProwlError)

    @pytest.mark.parametrize("cls", [FetchError, RewriteError, ExportCancelled])
    def test_export_failures(self, cls: type[ProwlError]) -> None:
        assert issubclass(cls, ExportError)

    def test_config_error_is_not_export_error(self) -> None:
        assert not issubclass(ConfigError, ExportError)

    def test_catch_all(self) -> None:
        with pytest.raises(ProwlError):
            raise ContentError("test")


class TestFetchError:
    """FetchError carries the failing URL and status."""

    def test_attributes(self) -> None:
        err = FetchError("boom", url="http://localhost:5055/?culture=en-US", status_code=502)
        assert str(err) == "boom"
        assert err.url == "http://localhost:5055/?culture=en-US"
        assert err.status_code == 502

    def test_status_defaults_to_none(self) -> None:
        err = FetchError("refused", url="http://localhost:5055/")
        assert err.status_code is None
