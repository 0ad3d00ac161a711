"""
Global test configuration and fixtures
"""

import os
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from core.config import AppSettings  # noqa: E402

REMOTE = "https://dev.azure.com/org/proj/_git/proj"


class FakeVcs:
    """In-memory VersionControlClient that records every query."""

    def __init__(self, remote_url: str = REMOTE, toplevel: str | None = None):
        self.remote_url = remote_url
        self.toplevel = toplevel
        self.calls: list[tuple[str, Path]] = []

    def get_remote_url(self, cwd: Path) -> str:
        self.calls.append(("remote", cwd))
        return self.remote_url

    def get_toplevel(self, cwd: Path) -> str:
        self.calls.append(("toplevel", cwd))
        return self.toplevel if self.toplevel is not None else str(cwd)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user-level config and OPEN_IN_ADO_* variables out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("OPEN_IN_ADO_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def repo(tmp_path) -> Path:
    """Repository-like tree: <tmp>/proj/src/a.txt"""
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "src" / "a.txt").write_text("one\ntwo\nthree\n", encoding="utf-8")
    return root


@pytest.fixture
def fake_vcs(repo) -> FakeVcs:
    return FakeVcs(toplevel=str(repo))


@pytest.fixture
def make_vcs():
    """Factory for FakeVcs with custom query results."""
    return FakeVcs
