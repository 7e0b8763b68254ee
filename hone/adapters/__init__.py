"""
Adapters — the boundary between hone and external tools.

Core services only talk to pacman, the AUR, git and makepkg through
these classes, never directly.
"""

from hone.adapters.aur import AurClient
from hone.adapters.base import PackageRegistry, SystemPackageManager
from hone.adapters.git import GitFetcher
from hone.adapters.makepkg import MakepkgBuilder
from hone.adapters.pacman import PacmanAdapter

__all__ = [
    "AurClient",
    "GitFetcher",
    "MakepkgBuilder",
    "PackageRegistry",
    "PacmanAdapter",
    "SystemPackageManager",
]
