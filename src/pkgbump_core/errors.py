from __future__ import annotations


class PkgbumpError(RuntimeError):
    pass


class RecipeError(PkgbumpError):
    """Recipe could not be loaded or does not match the expected schema."""


class FetchError(PkgbumpError):
    """A source could not be downloaded or read."""


class UnsupportedDigestError(PkgbumpError, ValueError):
    """Checksum algorithm makepkg does not know."""
