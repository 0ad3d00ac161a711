"""Wrapper around the `git` executable.

Why a wrapper:
- Standardizes timeouts, text decoding and error mapping for every git query.
- Eases testing: the resolver only sees `VersionControlClient`, so tests swap
  in a fake or monkeypatch `subprocess.run`.

A non-zero exit is never treated as success, even when stdout looks usable.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from core.config import AppSettings
from core.domain.errors import NoRemoteConfiguredError, SubprocessFailureError
from core.interfaces.vcs import VersionControlClient

logger = logging.getLogger(__name__)


def _first_line(text: str | None) -> str:
    for line in (text or "").splitlines():
        if line.strip():
            return line.rstrip()
    return ""


@dataclass
class GitResult:
    """Outcome of one git invocation."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """First non-empty stdout line, falling back to stderr."""

        return _first_line(self.stdout) or _first_line(self.stderr)


class GitCli(VersionControlClient):
    """Runs read-only git queries as blocking subprocesses."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def remote_name(self) -> str:
        return self._settings.remote_name

    def run(self, args: list[str], cwd: Path) -> GitResult:
        """Run `git <args>` in `cwd` and wait for it to exit.

        Raises `SubprocessFailureError` when git cannot be launched or exceeds
        `git_timeout_seconds`. Exit codes are left to the caller.
        """

        command = [self._settings.git_executable, *args]
        logger.debug("running %s in %s", " ".join(command), cwd)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=self._settings.git_timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("%s timed out after %ss", " ".join(command), exc.timeout)
            raise SubprocessFailureError(
                command,
                f"timed out after {self._settings.git_timeout_seconds:g}s",
            ) from exc
        except OSError as exc:
            logger.warning("could not launch %s: %s", command[0], exc)
            raise SubprocessFailureError(command, f"could not be launched ({exc})") from exc

        logger.debug("%s exited with %d", " ".join(command), completed.returncode)
        return GitResult(
            command=command,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def get_remote_url(self, cwd: Path) -> str:
        result = self.run(["remote", "get-url", self.remote_name], cwd)
        if not result.ok:
            raise NoRemoteConfiguredError(
                result.output,
                remote=self.remote_name,
                returncode=result.returncode,
            )
        return result.output

    def get_toplevel(self, cwd: Path) -> str:
        result = self.run(["rev-parse", "--show-toplevel"], cwd)
        if not result.ok:
            raise SubprocessFailureError(
                result.command,
                f"exited with status {result.returncode}",
                returncode=result.returncode,
                output=result.output,
            )
        return result.output

    def version(self, cwd: Path | None = None) -> str:
        """`git --version` output, for diagnostics."""

        result = self.run(["--version"], cwd or Path.cwd())
        if not result.ok:
            raise SubprocessFailureError(
                result.command,
                f"exited with status {result.returncode}",
                returncode=result.returncode,
                output=result.output,
            )
        return result.output
