"""Version-control client contract.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- Lets the resolver run against the real `git` adapter or an in-memory fake
  in tests, without coupling the core to `subprocess`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class VersionControlClient(Protocol):
    """Minimal read-only queries needed to build a deep link.

    Design rules:
    - Both queries are synchronous and run with `cwd` as working directory.
    - Each returns a single line of text (no trailing newline).
    """

    def get_remote_url(self, cwd: Path) -> str:
        """Return the configured remote URL (raw output when it is not a URL)."""

        ...

    def get_toplevel(self, cwd: Path) -> str:
        """Return the top-level directory of the working tree containing `cwd`."""

        ...
