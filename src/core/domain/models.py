"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to git or the CLI.
- `DeepLink` serializes straight to JSON for `--json` output.

These models describe *what* a request is, not *how* it is resolved.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic.config import ConfigDict

from core.domain.errors import InvalidSelectionError

# L | L:C | L:C-L:C | L-L | L:C-L | L-L:C
_SELECTION_RE = re.compile(
    r"^\s*(?P<sl>\d+)(?::(?P<sc>\d+))?(?:\s*-\s*(?P<el>\d+)(?::(?P<ec>\d+))?)?\s*$"
)


class Selection(BaseModel):
    """A 1-based line/column range in document order."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(..., ge=1, description="First selected line (1-based).")
    start_col: int = Field(default=1, ge=1, description="Column of the selection start (1-based).")
    end_line: int = Field(..., ge=1, description="Last selected line (1-based).")
    end_col: int = Field(default=1, ge=1, description="Column of the selection end (1-based).")

    @model_validator(mode="after")
    def _check_order(self) -> "Selection":
        if (self.start_line, self.start_col) > (self.end_line, self.end_col):
            raise ValueError(
                f"selection start {self.start_line}:{self.start_col} is after "
                f"end {self.end_line}:{self.end_col}"
            )
        return self

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


def make_selection(
    start_line: int,
    start_col: int = 1,
    end_line: int | None = None,
    end_col: int | None = None,
) -> Selection:
    """Build a `Selection`, turning validation failures into `InvalidSelectionError`.

    A missing end collapses onto the start position.
    """

    if end_line is None:
        end_line = start_line
        end_col = start_col if end_col is None else end_col
    if end_col is None:
        end_col = 1
    try:
        return Selection(
            start_line=start_line,
            start_col=start_col,
            end_line=end_line,
            end_col=end_col,
        )
    except ValidationError as exc:
        reasons = "; ".join(err["msg"] for err in exc.errors())
        raise InvalidSelectionError(
            f"Invalid selection: {reasons}",
            {
                "start": f"{start_line}:{start_col}",
                "end": f"{end_line}:{end_col}",
            },
        ) from exc


def parse_selection(text: str) -> Selection:
    """Parse `L`, `L:C`, `L-L` or `L:C-L:C` into a `Selection`."""

    match = _SELECTION_RE.match(text or "")
    if not match:
        raise InvalidSelectionError(
            f"Invalid selection: {text!r} (expected LINE[:COL][-LINE[:COL]])",
            {"selection": text},
        )

    start_line = int(match["sl"])
    start_col = int(match["sc"]) if match["sc"] else 1
    end_line = int(match["el"]) if match["el"] else None
    end_col = int(match["ec"]) if match["ec"] else None
    return make_selection(start_line, start_col, end_line, end_col)


class SelectionRequest(BaseModel):
    """Everything needed to compose one deep link.

    Built per invocation once both git queries have succeeded, then discarded.
    `repo_root` is always a strict prefix of `file_path`.
    """

    file_path: str = Field(..., min_length=1, description="Absolute path of the selected file.")
    repo_root: str = Field(..., min_length=1, description="Top-level directory of the git working tree.")
    remote_url: str = Field(..., min_length=1, description="Base URL of the hosted web viewer.")
    selection: Selection


class DeepLink(BaseModel):
    """Result of a resolution: the URL plus the values it was built from."""

    url: str = Field(..., description="Fully composed deep link.")
    remote_url: str = Field(..., description="Remote URL reported by git.")
    repo_root: str = Field(..., description="Repository root reported by git.")
    relative_path: str = Field(
        ...,
        description="File path relative to the repository root, POSIX separators.",
    )
    selection: Selection
