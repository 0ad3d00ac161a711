"""Deep-link resolution.

Turns a local file plus a selection into a link to the same range in the hosted
repository's web viewer. The only I/O performed here is the existence check and
the two read-only git queries behind `VersionControlClient`; printing and
launching the browser belong to the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from adapters.git_client import GitCli
from core.config import AppSettings
from core.domain.errors import (
    NoRemoteConfiguredError,
    PathOutsideRepositoryError,
    SourceFileNotFoundError,
)
from core.domain.models import DeepLink, Selection, SelectionRequest
from core.interfaces.vcs import VersionControlClient

logger = logging.getLogger(__name__)

# The viewer splits its query string on "/", so separators travel pre-encoded.
ENCODED_SEPARATOR = "%2F"


def encode_repo_path(file_path: str | PurePath, repo_root: str | PurePath) -> str:
    """Strip `repo_root` from `file_path` and render every separator as `%2F`.

    The result keeps the leading separator: `/repo/src/a.txt` under `/repo`
    becomes `%2Fsrc%2Fa.txt`.
    """

    if not isinstance(file_path, PurePath):
        file_path = PurePath(file_path)
    if not isinstance(repo_root, PurePath):
        repo_root = PurePath(repo_root)
    try:
        relative = file_path.relative_to(repo_root)
    except ValueError:
        raise PathOutsideRepositoryError(str(file_path), str(repo_root)) from None
    if not relative.parts:
        # The root itself is not a file inside the repository.
        raise PathOutsideRepositoryError(str(file_path), str(repo_root))
    return "".join(ENCODED_SEPARATOR + part for part in relative.parts)


def build_deep_link_url(request: SelectionRequest) -> str:
    """Compose the viewer URL. Parameter order is fixed; values are not escaped further."""

    selection = request.selection
    path = encode_repo_path(request.file_path, request.repo_root)
    return (
        f"{request.remote_url}"
        f"?path={path}"
        f"&line={selection.start_line}"
        f"&lineEnd={selection.end_line}"
        f"&lineStartColumn={selection.start_col}"
        f"&lineEndColumn={selection.end_col}"
        f"&lineStyle=plain"
        f"&_a=contents"
    )


def resolve_deep_link(
    file_path: str | Path,
    selection: Selection,
    *,
    vcs: VersionControlClient | None = None,
    settings: AppSettings | None = None,
) -> DeepLink:
    """Resolve the remote and repository root of `file_path` and build its deep link.

    Raises:
    - `SourceFileNotFoundError` when the file does not exist (no git query is run).
    - `NoRemoteConfiguredError` when the remote query does not return an http(s) URL
      (the root query is skipped).
    - `PathOutsideRepositoryError` when the file is not under the repository root.
    - `SubprocessFailureError` when git cannot run or exits abnormally.
    """

    settings = settings or AppSettings()
    vcs = vcs or GitCli(settings)

    path = Path(file_path).expanduser()
    if not path.is_file():
        raise SourceFileNotFoundError(str(file_path))
    path = path.resolve()
    cwd = path.parent

    remote_url = vcs.get_remote_url(cwd).strip()
    logger.debug("remote url for %s: %r", cwd, remote_url)
    if not remote_url.startswith("http"):
        raise NoRemoteConfiguredError(remote_url, remote=settings.remote_name)

    toplevel = vcs.get_toplevel(cwd).strip()
    logger.debug("repository root for %s: %r", cwd, toplevel)
    if not toplevel:
        raise PathOutsideRepositoryError(str(path), toplevel)
    repo_root = Path(toplevel).resolve()

    request = SelectionRequest(
        file_path=str(path),
        repo_root=str(repo_root),
        remote_url=remote_url,
        selection=selection,
    )
    url = build_deep_link_url(request)
    logger.debug("deep link: %s", url)

    return DeepLink(
        url=url,
        remote_url=remote_url,
        repo_root=toplevel,
        relative_path=path.relative_to(repo_root).as_posix(),
        selection=selection,
    )
