from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pkgbump_cli.config import settings
from pkgbump_core import BashRecipeLoader, Pkgbuild, PkgbumpError, SourceFetcher, SourceEntry, update_pkgbuild
from pkgbump_core.logging import setup_logging


def _print_progress(entry: SourceEntry) -> None:
    if entry.url:
        print(f"{entry.url} -> {entry.filename}")


def main(argv: list[str] | None = None) -> int:
    setup_logging(settings.log_level)
    log = logging.getLogger(__name__)
    parser = argparse.ArgumentParser(
        description="Set a new pkgver in a PKGBUILD, download its sources and refresh the checksums."
    )
    parser.add_argument("new_version", help="Version to write into pkgver")
    parser.add_argument("--pkgbuild", type=Path, default=Path("PKGBUILD"), help="Path to the PKGBUILD (default: ./PKGBUILD)")
    parser.add_argument("--write", action="store_true", help="Write the updated PKGBUILD back instead of only printing it")
    parser.add_argument("--arch", default=None, help="Target architecture (CARCH) used while evaluating the PKGBUILD")
    args = parser.parse_args(argv)

    carch = args.arch or settings.carch
    path: Path = args.pkgbuild
    workdir = path.resolve().parent
    try:
        pkgbuild = Pkgbuild.read(path)
        result = update_pkgbuild(
            pkgbuild,
            args.new_version,
            loader=BashRecipeLoader(
                bash_path=settings.bash_path,
                timeout=settings.bash_timeout,
                carch=carch,
                cwd=workdir,
            ),
            fetcher=SourceFetcher(
                timeout=settings.http_timeout,
                chunk_size=settings.chunk_size,
                user_agent=settings.user_agent,
            ),
            dest_dir=workdir,
            carch=carch,
            default_integrity=settings.default_integrity,
            on_source=_print_progress,
        )
        if args.write:
            result.pkgbuild.write(path)
            log.info("Wrote %s", path)
    except (PkgbumpError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.pkgbuild.content, end="" if result.pkgbuild.content.endswith("\n") else "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
