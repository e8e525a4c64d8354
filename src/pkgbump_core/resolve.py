"""Source specification helpers compatible with makepkg's util functions.

A source specification is ``"name::url"``, a bare ``url`` or a local file
name shipped next to the PKGBUILD.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from .recipe.base import Recipe
from .types import KNOWN_HASH_ALGOS


NAME_DELIMITER = "::"
VCS_PROTOCOLS = ("bzr", "fossil", "git", "hg", "svn")


def _strip_name(spec: str) -> str:
    if NAME_DELIMITER in spec:
        return spec.split(NAME_DELIMITER, 1)[1]
    return spec


def looks_like_url(spec: str) -> bool:
    rest = _strip_name(spec)
    return "://" in rest or "lp:" in rest


def get_protocol(spec: str) -> str:
    rest = _strip_name(spec)
    if "://" in rest:
        scheme = rest.split("://", 1)[0]
        # git+https -> git
        return scheme.split("+", 1)[0]
    if "lp:" in rest:
        return "bzr"
    return "local"


def is_vcs(spec: str) -> bool:
    return get_protocol(spec) in VCS_PROTOCOLS


def get_filename(spec: str) -> str:
    if NAME_DELIMITER in spec:
        return spec.split(NAME_DELIMITER, 1)[0]
    if not looks_like_url(spec):
        return spec

    proto = get_protocol(spec)
    name = spec
    if proto in VCS_PROTOCOLS:
        name = name.split("#", 1)[0]
        name = name.split("?", 1)[0]
        name = name.rstrip("/")
    name = name.rsplit("/", 1)[-1]
    if proto == "bzr" and "lp:" in name:
        name = name.split("lp:", 1)[1]
    elif proto == "fossil" and name.endswith(".fossil"):
        name = name[: -len(".fossil")]
    elif proto == "git" and ".git" in name:
        name = name.split(".git", 1)[0]
    return name


def get_url(spec: str) -> str:
    if NAME_DELIMITER in spec:
        return spec.split(NAME_DELIMITER, 1)[1]
    return spec if looks_like_url(spec) else ""


def get_integlist(recipe: Recipe) -> List[str]:
    """Algorithm names the recipe declares checksums for, in canonical order."""
    return [algo for algo in KNOWN_HASH_ALGOS if recipe.declares(algo)]


def integrity_values(recipe: Recipe, carch: Optional[str] = None) -> List[str]:
    values: List[str] = []
    for algo in KNOWN_HASH_ALGOS:
        values.extend(recipe.checksums_for(algo, carch))
    return values


@dataclass(frozen=True)
class SourceResolver:
    filename: Callable[[str], str]
    url: Callable[[str], str]
    integrity: Callable[[Recipe, Optional[str]], List[str]]


def default_resolver() -> SourceResolver:
    return SourceResolver(filename=get_filename, url=get_url, integrity=integrity_values)
