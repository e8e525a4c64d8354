from .errors import PkgbumpError, RecipeError, FetchError, UnsupportedDigestError
from .types import KNOWN_HASH_ALGOS, SKIP, Metadata, SourceEntry
from .recipe import Recipe, RecipeLoader, BashRecipeLoader, DocumentRecipeLoader
from .resolve import SourceResolver, default_resolver
from .projector import MetadataProjector, emit, to_json
from .pkgbuild import Pkgbuild, format_sums
from .digests import MultiDigest
from .fetch import SourceFetcher
from .updater import UpdateResult, update_pkgbuild

__all__ = [
    "PkgbumpError",
    "RecipeError",
    "FetchError",
    "UnsupportedDigestError",
    "KNOWN_HASH_ALGOS",
    "SKIP",
    "Metadata",
    "SourceEntry",
    "Recipe",
    "RecipeLoader",
    "BashRecipeLoader",
    "DocumentRecipeLoader",
    "SourceResolver",
    "default_resolver",
    "MetadataProjector",
    "emit",
    "to_json",
    "Pkgbuild",
    "format_sums",
    "MultiDigest",
    "SourceFetcher",
    "UpdateResult",
    "update_pkgbuild",
]
