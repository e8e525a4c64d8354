from __future__ import annotations

import argparse
import logging
import sys

from pkgbump_cli.config import settings
from pkgbump_core import BashRecipeLoader, DocumentRecipeLoader, MetadataProjector, RecipeError, emit
from pkgbump_core.logging import setup_logging
from pkgbump_core.recipe.base import RecipeLoader


def build_loader(fmt: str, carch: str | None) -> RecipeLoader:
    if fmt == "yaml":
        return DocumentRecipeLoader()
    return BashRecipeLoader(bash_path=settings.bash_path, timeout=settings.bash_timeout, carch=carch)


def main(argv: list[str] | None = None) -> int:
    setup_logging(settings.log_level)
    log = logging.getLogger(__name__)
    parser = argparse.ArgumentParser(
        description="Read a PKGBUILD from stdin and print its sources and checksums as JSON."
    )
    parser.add_argument(
        "--format",
        choices=["bash", "yaml"],
        default="bash",
        help="Recipe format on stdin: a PKGBUILD evaluated by bash (default) or a YAML/JSON document",
    )
    parser.add_argument("--arch", default=None, help="Include source_<arch> and <algo>sums_<arch> arrays")
    args = parser.parse_args(argv)

    carch = args.arch or settings.carch
    text = sys.stdin.read()
    try:
        recipe = build_loader(args.format, carch).load(text)
    except RecipeError as e:
        log.debug("Recipe load failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    md = MetadataProjector(carch=carch).project(recipe)
    emit(md.sources, md.hashes, sys.stdout)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
