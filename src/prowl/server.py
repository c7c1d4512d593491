"""Dynamic server lifecycle — the process the exporter crawls.

The export needs a server that is accepting requests before the first fetch
and that goes away once the run finishes.  Launchers make that an explicit
``start() -> handle`` / ``stop(handle)`` pair:

    ExternalServer   a server someone else already started
    CommandServer    a server process booted for the run and stopped after it
"""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx

from prowl._errors import ServerError

if TYPE_CHECKING:
    import threading
    from collections.abc import Sequence
    from pathlib import Path

    from prowl.export.static import ExportResult, StaticExporter

# Seconds between readiness checks
_POLL_INTERVAL = 0.2

# Seconds to wait for a terminated server before killing it
_STOP_GRACE = 5.0


@dataclass(frozen=True, slots=True)
class ServerHandle:
    """A running dynamic server.

    Attributes:
        base_url: URL the server accepts requests on.
        process: Server process when prowl started it, else None.

    """

    base_url: str
    process: subprocess.Popen[bytes] | None = None


class ServerLauncher(Protocol):
    def start(self) -> ServerHandle: ...

    def stop(self, handle: ServerHandle) -> None: ...


class ExternalServer:
    """Launcher for a server that is already running at *base_url*."""

    __slots__ = ("_base_url",)

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url

    def start(self) -> ServerHandle:
        return ServerHandle(base_url=self._base_url)

    def stop(self, handle: ServerHandle) -> None:
        """Nothing to stop; the server's owner manages it."""


class CommandServer:
    """Launcher that boots the server with a command and waits for it.

    The server counts as ready once *base_url* answers with any HTTP
    response.  The server process inherits prowl's stdout and stderr.

    Args:
        command: Program and arguments.
        base_url: URL the booted server will listen on.
        cwd: Working directory for the process.
        startup_timeout: Seconds to wait for the first response.

    """

    __slots__ = ("_base_url", "_command", "_cwd", "_startup_timeout")

    def __init__(
        self,
        command: Sequence[str],
        base_url: str,
        *,
        cwd: Path | None = None,
        startup_timeout: float = 30.0,
    ) -> None:
        if not command:
            msg = "Server command is empty"
            raise ServerError(msg)
        self._command = tuple(command)
        self._base_url = base_url
        self._cwd = cwd
        self._startup_timeout = startup_timeout

    def start(self) -> ServerHandle:
        """Start the process and block until it answers requests.

        Raises:
            ServerError: If the command cannot be run, exits early, or does
                not answer within the startup timeout.

        """
        try:
            process = subprocess.Popen(self._command, cwd=self._cwd)
        except OSError as exc:
            msg = f"Cannot start server {' '.join(self._command)!r}: {exc}"
            raise ServerError(msg) from exc

        handle = ServerHandle(base_url=self._base_url, process=process)
        try:
            self._wait_until_ready(process)
        except ServerError:
            self.stop(handle)
            raise
        return handle

    def _wait_until_ready(self, process: subprocess.Popen[bytes]) -> None:
        deadline = time.monotonic() + self._startup_timeout
        with httpx.Client(timeout=_POLL_INTERVAL * 5) as client:
            while True:
                code = process.poll()
                if code is not None:
                    msg = f"Server exited with code {code} before accepting requests"
                    raise ServerError(msg)
                try:
                    client.get(self._base_url)
                except httpx.TransportError:
                    pass
                else:
                    return
                if time.monotonic() >= deadline:
                    msg = (
                        f"Server did not answer on {self._base_url} "
                        f"within {self._startup_timeout:.0f}s"
                    )
                    raise ServerError(msg)
                time.sleep(_POLL_INTERVAL)

    def stop(self, handle: ServerHandle) -> None:
        """Terminate the server process, killing it if it does not exit."""
        process = handle.process
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=_STOP_GRACE)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()


def run_export(
    launcher: ServerLauncher,
    exporter: StaticExporter,
    cancel: threading.Event | None = None,
) -> ExportResult:
    """Start the server, export against it, and stop it whatever happens."""
    handle = launcher.start()
    try:
        return exporter.export(handle, cancel)
    finally:
        launcher.stop(handle)
