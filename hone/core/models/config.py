"""
Configuration model — settings loaded from config.yml.

Every field has a default, so an absent config file yields a working
setup for a regular Arch Linux user.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

MANIFEST_DIR = "Installed"
MANIFEST_FILE = "package_list.txt"


def _default_cache_root() -> Path:
    return Path.home() / ".cache" / "hone"


class HoneConfig(BaseModel):
    """Runtime settings for the AUR helper."""

    cache_root: Path = Field(default_factory=_default_cache_root)

    registry_url: str = "https://aur.archlinux.org/rpc/"
    clone_url: str = "https://aur.archlinux.org/{name}.git"
    user_agent: str = "hone/0.1"
    request_timeout: int = 30

    # Installed packages with these suffixes are split debug packages
    debug_suffixes: list[str] = Field(default_factory=lambda: ["-debug"])

    makepkg_flags: list[str] = Field(default_factory=lambda: ["-risc"])
    pacman: str = "pacman"
    sudo: str = "sudo"
    git: str = "git"
    makepkg: str = "makepkg"

    @property
    def manifest_path(self) -> Path:
        """Where the installed-package manifest lives."""
        return self.cache_root / MANIFEST_DIR / MANIFEST_FILE

    def workspace_for(self, name: str) -> Path:
        """Per-package build workspace under the cache root."""
        return self.cache_root / name

    def clone_url_for(self, name: str) -> str:
        return self.clone_url.format(name=name)
