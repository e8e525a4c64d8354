from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
import re


# top-level assignment: either a (possibly multi-line) array, optionally followed by
# blanks and a comment, or the rest of the line
_ASSIGN_RE = re.compile(
    r"^([A-Za-z_][A-Za-z0-9_]*)=(?:\([^)]*\)([ \t]*(?:#.*)?)|.*)$", re.MULTILINE
)


@dataclass
class Pkgbuild:
    content: str

    @classmethod
    def read(cls, path: Path) -> "Pkgbuild":
        return cls(content=path.read_text(encoding="utf-8"))

    def write(self, path: Path) -> None:
        path.write_text(self.content, encoding="utf-8")

    def set(self, key: str, value: str) -> bool:
        """Replace the value of every ``key=`` assignment. Returns True if any matched."""
        hits = 0

        def _sub(m: re.Match) -> str:
            nonlocal hits
            if m.group(1) != key:
                return m.group(0)
            hits += 1
            return f"{key}={value}{m.group(2) or ''}"

        self.content = _ASSIGN_RE.sub(_sub, self.content)
        return hits > 0

    def __str__(self) -> str:
        return self.content


def _quote(value: str) -> str:
    return "'" + value.replace("'", "'\\''") + "'"


def format_sums(name: str, values: Iterable[str]) -> str:
    """Format an array the way makepkg -g does, aligned under the opening paren."""
    sep = "\n" + " " * (len(name) + 2)
    return "(" + sep.join(_quote(v) for v in values) + ")"
