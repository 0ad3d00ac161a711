"""Error taxonomy for deep-link resolution.

Every error is terminal for the invocation: none of them is retried. Each one
carries a human-readable `message` and a `details` dict that the CLI renders
(offending path, raw git output, exit status).
"""

from __future__ import annotations

from typing import Any


class DeepLinkError(Exception):
    """Base class for every failure surfaced to the user."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}


class SourceFileNotFoundError(DeepLinkError, FileNotFoundError):
    """The requested file does not exist on the local filesystem."""

    def __init__(self, file_path: str) -> None:
        super().__init__(f"Invalid path: {file_path}", {"file_path": file_path})
        self.file_path = file_path


class NoRemoteConfiguredError(DeepLinkError):
    """The remote-URL query did not return an http(s) URL."""

    def __init__(self, output: str, *, remote: str = "origin", returncode: int | None = None) -> None:
        details: dict[str, Any] = {"remote": remote, "output": output}
        if returncode is not None:
            details["returncode"] = returncode
        super().__init__(
            f"Unable to get remote url by 'git remote get-url {remote}'. Output: {output}",
            details,
        )
        self.output = output
        self.returncode = returncode


class PathOutsideRepositoryError(DeepLinkError):
    """The file does not live under the detected repository root."""

    def __init__(self, file_path: str, repo_root: str) -> None:
        super().__init__(
            f"{file_path} is not inside repository {repo_root}",
            {"file_path": file_path, "repo_root": repo_root},
        )
        self.file_path = file_path
        self.repo_root = repo_root


class SubprocessFailureError(DeepLinkError):
    """git could not be launched, timed out, or exited abnormally."""

    def __init__(
        self,
        command: list[str],
        reason: str,
        *,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        details: dict[str, Any] = {"command": " ".join(command), "reason": reason}
        if returncode is not None:
            details["returncode"] = returncode
        if output:
            details["output"] = output
        super().__init__(f"Git error: '{' '.join(command)}' failed: {reason}", details)
        self.command = command
        self.returncode = returncode
        self.output = output


class InvalidSelectionError(DeepLinkError):
    """Selection coordinates are not positive or not in document order."""
