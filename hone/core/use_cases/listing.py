"""
List use case — show the packages recorded in the manifest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from hone.core.context import Services
from hone.core.models.package import ManifestEntry
from hone.core.persistence.manifest import ManifestError


@dataclass
class ListResult:
    entries: list[ManifestEntry] = field(default_factory=list)
    manifest_path: Path | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "manifest": str(self.manifest_path) if self.manifest_path else None,
            "packages": [e.model_dump() for e in self.entries],
            "count": len(self.entries),
        }


def list_installed(services: Services) -> ListResult:
    result = ListResult(manifest_path=services.store.path)
    try:
        result.entries = services.store.load()
    except ManifestError as e:
        result.error = str(e)
    return result
