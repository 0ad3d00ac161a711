"""
CLI tests (typer CliRunner, git replaced by FakeVcs)
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli import main as cli_main

runner = CliRunner()

REMOTE = "https://dev.azure.com/org/proj/_git/proj"


@pytest.fixture
def use_vcs(monkeypatch):
    def install(vcs):
        monkeypatch.setattr(cli_main, "GitCli", lambda settings: vcs)
        return vcs

    return install


@pytest.fixture
def launched(monkeypatch):
    urls = []

    def fake_launch(url, *args, **kwargs):
        urls.append(url)
        return 0

    monkeypatch.setattr(cli_main.typer, "launch", fake_launch)
    return urls


def test_link_prints_url(repo, fake_vcs, use_vcs):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["link", str(repo / "src" / "a.txt"), "10:1-12:5"])

    assert result.exit_code == 0, result.output
    assert (
        f"{REMOTE}?path=%2Fsrc%2Fa.txt&line=10&lineEnd=12&lineStartColumn=1"
        "&lineEndColumn=5&lineStyle=plain&_a=contents"
    ) in result.output


def test_link_with_options(repo, fake_vcs, use_vcs):
    use_vcs(fake_vcs)

    result = runner.invoke(
        cli_main.app,
        ["link", str(repo / "src" / "a.txt"), "--line", "2", "--line-end", "3", "--column-end", "4"],
    )

    assert result.exit_code == 0, result.output
    assert "&line=2&lineEnd=3&lineStartColumn=1&lineEndColumn=4&" in result.output


def test_link_defaults_to_first_line(repo, fake_vcs, use_vcs):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["link", str(repo / "src" / "a.txt")])

    assert result.exit_code == 0, result.output
    assert "&line=1&lineEnd=1&lineStartColumn=1&lineEndColumn=1&" in result.output


def test_link_json(repo, fake_vcs, use_vcs):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["link", str(repo / "src" / "a.txt"), "2", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["relative_path"] == "src/a.txt"
    assert payload["selection"]["start_line"] == 2


def test_selection_and_options_conflict(repo, fake_vcs, use_vcs):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["link", str(repo / "src" / "a.txt"), "1", "--line", "2"])

    assert result.exit_code == 2
    assert fake_vcs.calls == []


def test_missing_file_exits_with_error(tmp_path, fake_vcs, use_vcs):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["link", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "Invalid path" in result.output
    assert fake_vcs.calls == []


def test_no_remote_exits_with_error(repo, make_vcs, use_vcs):
    use_vcs(make_vcs(remote_url="fatal: no remote", toplevel=str(repo)))

    result = runner.invoke(cli_main.app, ["link", str(repo / "src" / "a.txt")])

    assert result.exit_code == 1
    assert "fatal: no remote" in result.output


def test_invalid_selection_exits_with_error(repo, fake_vcs, use_vcs):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["link", str(repo / "src" / "a.txt"), "5-2"])

    assert result.exit_code == 1
    assert "Invalid selection" in result.output
    assert fake_vcs.calls == []


@pytest.mark.parametrize("option", ["--column", "--column-end"])
def test_zero_column_option_is_invalid(repo, fake_vcs, use_vcs, option):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["link", str(repo / "src" / "a.txt"), "--line", "2", option, "0"])

    assert result.exit_code == 1
    assert "Invalid selection" in result.output
    assert fake_vcs.calls == []


def test_open_launches_browser(repo, fake_vcs, use_vcs, launched):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["open", str(repo / "src" / "a.txt"), "3:2-3:5", "--print"])

    assert result.exit_code == 0, result.output
    assert len(launched) == 1
    assert launched[0].startswith(f"{REMOTE}?path=%2Fsrc%2Fa.txt&line=3&lineEnd=3&")
    assert launched[0] in result.output


def test_open_does_not_launch_on_error(tmp_path, fake_vcs, use_vcs, launched):
    use_vcs(fake_vcs)

    result = runner.invoke(cli_main.app, ["open", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert launched == []


def test_invalid_env_config(monkeypatch):
    monkeypatch.setenv("OPEN_IN_ADO_GIT_TIMEOUT_SECONDS", "-1")

    result = runner.invoke(cli_main.app, ["link", "whatever.txt"])

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_runs_as_module():
    src = Path(__file__).resolve().parents[2] / "src"
    env = {**os.environ, "PYTHONPATH": str(src)}

    result = subprocess.run(
        [sys.executable, "-m", "cli.main", "--help"],
        capture_output=True,
        text=True,
        env=env,
    )

    assert result.returncode == 0, result.stderr
    assert "link" in result.stdout
