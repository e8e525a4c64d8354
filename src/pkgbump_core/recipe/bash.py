from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
import logging
import os
import subprocess

from ..errors import RecipeError
from ..types import KNOWN_HASH_ALGOS
from .base import Recipe, RecipeLoader, recipe_from_dict


# Sources the recipe read from stdin, then prints every array of interest as
# NUL separated records: name, element count, elements.
# Positional arguments are the checksum algorithm names.
DUMP_SCRIPT = r"""
_pkgbump_recipe=$(cat) || exit 1
if ! "$BASH" -n <<<"$_pkgbump_recipe"; then
    exit 3
fi
eval "$_pkgbump_recipe" >&2

_pkgbump_dump() {
    local _name=$1
    declare -p "$_name" >/dev/null 2>&1 || return 0
    local _ref="${_name}[@]"
    local _vals=("${!_ref}")
    printf '%s\0' "$_name" "${#_vals[@]}" "${_vals[@]}"
}

_pkgbump_names=(pkgname pkgver arch source)
for _pkgbump_algo in "$@"; do
    _pkgbump_names+=("${_pkgbump_algo}sums")
done
for _pkgbump_arch in "${arch[@]}"; do
    _pkgbump_names+=("source_${_pkgbump_arch}")
    for _pkgbump_algo in "$@"; do
        _pkgbump_names+=("${_pkgbump_algo}sums_${_pkgbump_arch}")
    done
done
for _pkgbump_name in "${_pkgbump_names[@]}"; do
    _pkgbump_dump "$_pkgbump_name"
done
"""


def parse_dump(raw: str) -> Dict[str, List[str]]:
    fields = raw.split("\0")
    if fields and fields[-1] == "":
        fields.pop()
    out: Dict[str, List[str]] = {}
    i = 0
    while i < len(fields):
        if i + 1 >= len(fields):
            raise RecipeError(f"Truncated recipe dump near {fields[i]!r}")
        name = fields[i]
        try:
            count = int(fields[i + 1])
        except ValueError as e:
            raise RecipeError(f"Malformed recipe dump for {name!r}") from e
        start = i + 2
        if start + count > len(fields):
            raise RecipeError(f"Truncated recipe dump for {name!r}")
        out[name] = fields[start : start + count]
        i = start + count
    return out


@dataclass
class BashRecipeLoader(RecipeLoader):
    """Evaluates a PKGBUILD with bash and reads back its arrays.

    The recipe is executed as shell code, so only feed it trusted input.
    """

    bash_path: str = "bash"
    timeout: float = 30.0
    carch: Optional[str] = None
    cwd: Optional[Path] = None

    def _env(self) -> Dict[str, str]:
        env = dict(os.environ)
        if self.carch:
            env["CARCH"] = self.carch
        return env

    def load(self, text: str) -> Recipe:
        log = logging.getLogger(__name__)
        log.debug("Evaluating recipe with %s (%d bytes)", self.bash_path, len(text))
        try:
            proc = subprocess.run(
                [self.bash_path, "-c", DUMP_SCRIPT, "pkgbump", *KNOWN_HASH_ALGOS],
                input=text.encode("utf-8"),
                capture_output=True,
                timeout=self.timeout,
                cwd=str(self.cwd) if self.cwd else None,
                env=self._env(),
            )
        except FileNotFoundError as e:
            raise RecipeError(f"bash not found: {self.bash_path}") from e
        except subprocess.TimeoutExpired as e:
            raise RecipeError(f"Recipe evaluation timed out after {self.timeout}s") from e

        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        if proc.returncode != 0:
            detail = f": {stderr}" if stderr else ""
            raise RecipeError(f"Recipe evaluation failed with exit code {proc.returncode}{detail}")
        if stderr:
            log.debug("Recipe stderr: %s", stderr)

        data = parse_dump(proc.stdout.decode("utf-8", errors="replace"))
        return recipe_from_dict(data)
