# src/pkgbump_cli/config.py
from typing import Optional
from pydantic_settings import BaseSettings


def _pkg_version() -> str:
    try:
        import importlib.metadata as im
        return im.version("pkgbump")
    except Exception:
        return "0.0.0"


class Settings(BaseSettings):
    log_level: str = "INFO"
    # Recipe evaluation
    bash_path: str = "bash"
    bash_timeout: float = 30.0
    carch: Optional[str] = None  # e.g. x86_64; enables source_<arch> / <algo>sums_<arch>
    # Downloads
    http_timeout: float = 60.0
    chunk_size: int = 8 * 1024
    user_agent: str = f"pkgbump/{_pkg_version()}"
    # Used when a PKGBUILD declares no checksum arrays at all (makepkg INTEGRITY_CHECK)
    default_integrity: list[str] = ["sha256"]

    class Config:
        env_prefix = "PKGBUMP_"
        extra = "ignore"

settings = Settings()
