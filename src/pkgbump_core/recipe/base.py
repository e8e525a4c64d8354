from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..errors import RecipeError
from ..types import KNOWN_HASH_ALGOS


@dataclass(frozen=True)
class Recipe:
    source: List[str] = field(default_factory=list)
    checksums: Dict[str, List[str]] = field(default_factory=dict)
    arch: List[str] = field(default_factory=list)
    pkgname: Optional[str] = None
    pkgver: Optional[str] = None
    # per-architecture arrays, e.g. source_x86_64 / sha256sums_x86_64
    arch_source: Dict[str, List[str]] = field(default_factory=dict)
    arch_checksums: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)

    def sources_for(self, carch: Optional[str] = None) -> List[str]:
        out = list(self.source)
        if carch:
            out.extend(self.arch_source.get(carch, []))
        return out

    def checksums_for(self, algo: str, carch: Optional[str] = None) -> List[str]:
        out = list(self.checksums.get(algo, []))
        if carch:
            out.extend(self.arch_checksums.get(carch, {}).get(algo, []))
        return out

    def declares(self, algo: str) -> bool:
        """True when ``<algo>sums`` or any ``<algo>sums_<arch>`` has values."""
        if self.checksums.get(algo):
            return True
        return any(per.get(algo) for per in self.arch_checksums.values())


class RecipeLoader(ABC):
    @abstractmethod
    def load(self, text: str) -> Recipe:
        """Turn recipe text into a Recipe."""
        raise NotImplementedError


def _str_list(key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise RecipeError(f"{key} must be a string or a list of strings")
    out: List[str] = []
    for v in value:
        if not isinstance(v, str):
            raise RecipeError(f"{key} entries must be strings, got {type(v).__name__}")
        out.append(v)
    return out


def _opt_str(key: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    if not isinstance(value, str):
        raise RecipeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def recipe_from_dict(data: Mapping[str, Any]) -> Recipe:
    if not isinstance(data, Mapping):
        raise RecipeError("Recipe document must be a mapping")

    arch = _str_list("arch", data.get("arch"))
    checksums: Dict[str, List[str]] = {}
    for algo in KNOWN_HASH_ALGOS:
        values = _str_list(f"{algo}sums", data.get(f"{algo}sums"))
        if values:
            checksums[algo] = values

    arch_source: Dict[str, List[str]] = {}
    arch_checksums: Dict[str, Dict[str, List[str]]] = {}
    for a in arch:
        srcs = _str_list(f"source_{a}", data.get(f"source_{a}"))
        if srcs:
            arch_source[a] = srcs
        per: Dict[str, List[str]] = {}
        for algo in KNOWN_HASH_ALGOS:
            values = _str_list(f"{algo}sums_{a}", data.get(f"{algo}sums_{a}"))
            if values:
                per[algo] = values
        if per:
            arch_checksums[a] = per

    return Recipe(
        source=_str_list("source", data.get("source")),
        checksums=checksums,
        arch=arch,
        pkgname=_opt_str("pkgname", data.get("pkgname")),
        pkgver=_opt_str("pkgver", data.get("pkgver")),
        arch_source=arch_source,
        arch_checksums=arch_checksums,
    )
