from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging

from .digests import MultiDigest
from .fetch import SourceFetcher
from .pkgbuild import Pkgbuild, format_sums
from .projector import MetadataProjector
from .recipe.base import Recipe, RecipeLoader
from .resolve import get_filename, get_integlist, get_url, is_vcs
from .types import SKIP, Metadata, SourceEntry


DEFAULT_INTEGRITY = ("sha256",)


@dataclass
class UpdateResult:
    pkgbuild: Pkgbuild
    metadata: Metadata
    # array name (e.g. "sha256sums" or "sha256sums_x86_64") -> new values
    sums: Dict[str, List[str]] = field(default_factory=dict)


def _source_groups(recipe: Recipe) -> List[Tuple[str, List[str]]]:
    groups: List[Tuple[str, List[str]]] = [("", list(recipe.source))]
    for arch in recipe.arch:
        srcs = recipe.arch_source.get(arch)
        if srcs:
            groups.append((f"_{arch}", list(srcs)))
    return groups


def _hash_group(
    specs: Sequence[str],
    algorithms: Sequence[str],
    fetcher: SourceFetcher,
    dest_dir: Path,
    on_source: Optional[Callable[[SourceEntry], None]],
) -> List[List[str]]:
    log = logging.getLogger(__name__)
    digest = MultiDigest(algorithms)
    per_algo: List[List[str]] = [[] for _ in algorithms]
    for spec in specs:
        entry = SourceEntry(filename=get_filename(spec), url=get_url(spec))
        if on_source:
            on_source(entry)
        if is_vcs(spec):
            log.info("Skipping checksum for VCS source %s", entry.url)
            values = [SKIP] * len(algorithms)
        elif not entry.url:
            fetcher.hash_local(dest_dir / entry.filename, digest)
            values = digest.hexdigests()
        else:
            log.debug("Downloading %s -> %s", entry.url, entry.filename)
            fetcher.download(entry.url, dest_dir / entry.filename, digest)
            values = digest.hexdigests()
        for bucket, value in zip(per_algo, values):
            bucket.append(value)
    return per_algo


def update_pkgbuild(
    pkgbuild: Pkgbuild,
    new_version: str,
    *,
    loader: RecipeLoader,
    fetcher: SourceFetcher,
    dest_dir: Path,
    carch: Optional[str] = None,
    default_integrity: Sequence[str] = DEFAULT_INTEGRITY,
    on_source: Optional[Callable[[SourceEntry], None]] = None,
) -> UpdateResult:
    """Bump ``pkgver``, download every source and rewrite the checksum arrays."""
    log = logging.getLogger(__name__)
    if not pkgbuild.set("pkgver", new_version):
        log.warning("No pkgver assignment found; version not changed")
    pkgbuild.set("pkgrel", "1")

    recipe = loader.load(pkgbuild.content)
    metadata = MetadataProjector(carch=carch).project(recipe)
    algorithms = get_integlist(recipe) or list(default_integrity)
    log.info("Updating %s to %s using %s", recipe.pkgname or "package", new_version, ",".join(algorithms))

    sums: Dict[str, List[str]] = {}
    for suffix, specs in _source_groups(recipe):
        per_algo = _hash_group(specs, algorithms, fetcher, dest_dir, on_source)
        for algo, values in zip(algorithms, per_algo):
            name = f"{algo}sums{suffix}"
            sums[name] = values
            formatted = format_sums(name, values)
            if not pkgbuild.set(name, formatted) and values:
                pkgbuild.content = pkgbuild.content.rstrip("\n") + f"\n{name}={formatted}\n"

    return UpdateResult(pkgbuild=pkgbuild, metadata=metadata, sums=sums)
