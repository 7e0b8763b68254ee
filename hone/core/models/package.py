"""
Package models — what the registry, pacman and the manifest know about.

``RegistryPackage`` is transient (parsed per query), ``InstalledPackage``
is one row of ``pacman -Qm`` and ``ManifestEntry`` is one line of the
local manifest.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

UNKNOWN_VERSION = "Unknown"
NO_DESCRIPTION = "No description available"


class RegistryPackage(BaseModel):
    """A package as reported by the AUR RPC interface."""

    name: str
    version: str = UNKNOWN_VERSION
    description: str = NO_DESCRIPTION

    @classmethod
    def from_rpc(cls, raw: dict[str, Any]) -> RegistryPackage:
        """Build from one entry of the RPC ``results`` array.

        Missing or null fields fall back to the sentinel strings.
        """
        return cls(
            name=str(raw.get("Name") or "Unknown"),
            version=str(raw.get("Version") or UNKNOWN_VERSION),
            description=str(raw.get("Description") or NO_DESCRIPTION),
        )


class InstalledPackage(BaseModel):
    """A foreign package currently installed on the system."""

    name: str
    version: str


class ManifestEntry(BaseModel):
    """A tracked package and the version recorded when it was installed."""

    name: str
    version: str

    def to_line(self) -> str:
        return f"{self.name} {self.version}"


class VersionLookup(BaseModel):
    """Outcome of an exact-name registry lookup.

    ``not_found`` means the registry answered and has no such package;
    ``failed`` means the registry could not be asked or gave garbage.
    """

    name: str
    status: Literal["found", "not_found", "failed"]
    version: str | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.status == "found"

    @classmethod
    def hit(cls, name: str, version: str) -> VersionLookup:
        return cls(name=name, status="found", version=version)

    @classmethod
    def miss(cls, name: str) -> VersionLookup:
        return cls(name=name, status="not_found")

    @classmethod
    def failure(cls, name: str, error: str) -> VersionLookup:
        return cls(name=name, status="failed", error=error)
