"""
Adapter base — the contracts core services rely on.

Two collaborators sit behind abstract interfaces so services can be
exercised against in-memory fakes:

    SystemPackageManager   what is installed (pacman)
    PackageRegistry        what is current (the AUR)

Implementations never raise for operational failures.  Commands come
back as Receipts and queries degrade to empty results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hone.core.models.package import InstalledPackage, RegistryPackage, VersionLookup
from hone.core.models.receipt import Receipt


class SystemPackageManager(ABC):
    """The OS package manager hone layers on top of."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'pacman')."""

    @abstractmethod
    def is_installed(self, package: str) -> bool:
        """Whether ``package`` is installed.  Spawn failure counts as False."""

    @abstractmethod
    def list_foreign_installed(self) -> list[InstalledPackage]:
        """Installed packages that do not come from the official repos."""

    @abstractmethod
    def system_upgrade(self) -> Receipt:
        """Upgrade the whole system from the official repos."""

    @abstractmethod
    def remove(self, package: str) -> Receipt:
        """Uninstall ``package``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class PackageRegistry(ABC):
    """A remote package index answering search and info queries."""

    @abstractmethod
    def search(self, query: str) -> list[RegistryPackage]:
        """Packages matching ``query``.  Empty on no match or failure."""

    @abstractmethod
    def lookup_version(self, name: str) -> VersionLookup:
        """Current version of the package named exactly ``name``."""

    def get_version(self, name: str) -> str | None:
        """Current version, or None when it cannot be determined."""
        lookup = self.lookup_version(name)
        return lookup.version if lookup.found else None
