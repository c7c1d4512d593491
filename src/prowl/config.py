"""Prowl configuration.

ProwlConfig is the central configuration object, frozen after creation and
passed explicitly to every export component.
"""

from dataclasses import dataclass, field
from pathlib import Path

from prowl._errors import ConfigError


@dataclass(frozen=True, slots=True)
class ProwlConfig:
    """Configuration for one export run.

    Attributes:
        root: Site content root (holds the route manifest, the asset directory
              and the content database).  Always resolved to an absolute path.
        output: Export root.  Relative paths resolve against ``root``.
        base_url: URL of the running dynamic server.
        sub_path: Deployment sub-path the export will be served under
            (e.g. ``/HybridWeb``).  Empty means the site is served at ``/``.
            Normalised to a leading slash and no trailing slash.
        default_locale: Redirect target for the root entry page.  Falls back
            to the first manifest locale when unset.
        manifest: File name of the route manifest inside ``root``.
        assets_dir: Static asset directory name.  Used for the source
            directory, the URL mount point and the destination directory.
        database: SQLite content database file, relative to ``root``.
        detail_route: Template for content routes; ``{slug}`` is substituted.
        timeout: Per-request HTTP timeout in seconds.
        workers: Fetch worker count (1 = sequential).
        strict_rewrite: Raise when a sub-path is set but a page held no
            rewritable reference, instead of warning.
        server_command: Command that boots the dynamic server for the run.
            When unset the server at ``base_url`` must already be running.
        startup_timeout: Seconds to wait for a booted server to answer.

    """

    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("dist-static"))
    base_url: str = "http://localhost:5055"
    sub_path: str = ""
    default_locale: str | None = None
    manifest: str = "export-routes.json"
    assets_dir: str = "wwwroot"
    database: str = "app.db"
    detail_route: str = "/News/Detail/{slug}"
    timeout: float = 30.0
    workers: int = 1
    strict_rewrite: bool = False
    server_command: tuple[str, ...] | None = None
    startup_timeout: float = 30.0

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        sub_path = self.sub_path.strip().rstrip("/")
        if sub_path and not sub_path.startswith("/"):
            sub_path = "/" + sub_path
        object.__setattr__(self, "sub_path", sub_path)
        if self.workers < 1:
            msg = f"workers must be at least 1, got {self.workers}"
            raise ConfigError(msg)

    @property
    def manifest_path(self) -> Path:
        """Absolute path to the route manifest."""
        return self.root / self.manifest

    @property
    def assets_path(self) -> Path:
        """Absolute path to the static asset source directory."""
        return self.root / self.assets_dir

    @property
    def database_path(self) -> Path:
        """Absolute path to the content database."""
        return self.root / self.database

    @property
    def output_path(self) -> Path:
        """Absolute path to the export root."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
