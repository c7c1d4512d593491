"""Tests for prowl.config — ProwlConfig normalisation and derived paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from prowl._errors import ConfigError
from prowl.config import ProwlConfig


class TestProwlConfigDefaults:
    """Default values match the site's conventions."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = ProwlConfig(root=tmp_path)
        assert config.base_url == "http://localhost:5055"
        assert config.sub_path == ""
        assert config.default_locale is None
        assert config.workers == 1
        assert config.strict_rewrite is False
        assert config.server_command is None
        assert config.detail_route == "/News/Detail/{slug}"

    def test_frozen(self, tmp_path: Path) -> None:
        config = ProwlConfig(root=tmp_path)
        with pytest.raises(AttributeError):
            config.workers = 4  # type: ignore[misc]

    def test_relative_root_resolved(self) -> None:
        config = ProwlConfig(root=Path("site"))
        assert config.root.is_absolute()
        assert config.root.name == "site"


class TestSubPath:
    """sub_path normalisation."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", ""),
            ("/", ""),
            ("/HybridWeb", "/HybridWeb"),
            ("/HybridWeb/", "/HybridWeb"),
            ("HybridWeb", "/HybridWeb"),
            ("  /app/  ", "/app"),
        ],
    )
    def test_normalised(self, tmp_path: Path, raw: str, expected: str) -> None:
        assert ProwlConfig(root=tmp_path, sub_path=raw).sub_path == expected


class TestDerivedPaths:
    """Paths derived from root."""

    def test_site_files(self, tmp_path: Path) -> None:
        config = ProwlConfig(root=tmp_path)
        assert config.manifest_path == tmp_path / "export-routes.json"
        assert config.assets_path == tmp_path / "wwwroot"
        assert config.database_path == tmp_path / "app.db"

    def test_relative_output(self, tmp_path: Path) -> None:
        config = ProwlConfig(root=tmp_path)
        assert config.output_path == tmp_path / "dist-static"

    def test_absolute_output(self, tmp_path: Path) -> None:
        out = tmp_path / "elsewhere"
        config = ProwlConfig(root=tmp_path / "site", output=out)
        assert config.output_path == out


class TestValidation:
    def test_workers_must_be_positive(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="workers"):
            ProwlConfig(root=tmp_path, workers=0)
