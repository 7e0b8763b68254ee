"""
Manifest reconciliation — bring the manifest in line after an upgrade run.

Packages that were upgraded but never recorded (installed before hone
tracked them, or a single-install record that was missed) are appended
at the current registry version.  Existing entries keep their order.
"""

from __future__ import annotations

import logging

from hone.adapters.base import PackageRegistry
from hone.core.models.package import ManifestEntry
from hone.core.persistence.manifest import ManifestStore

logger = logging.getLogger(__name__)


def sync_manifest_with_installed(
    store: ManifestStore,
    registry: PackageRegistry,
    updated: list[str],
) -> list[str]:
    """Merge ``updated`` into the manifest and rewrite it in full.

    Returns:
        Names that were newly added.

    Raises:
        ManifestError: If the manifest cannot be read or written.
    """
    entries = store.load()
    known = {e.name for e in entries}
    added: list[str] = []

    for name in updated:
        if name in known:
            continue
        lookup = registry.lookup_version(name)
        if not lookup.found or lookup.version is None:
            logger.warning("Not recording %s: current version unknown (%s)", name, lookup.status)
            continue
        entries.append(ManifestEntry(name=name, version=lookup.version))
        known.add(name)
        added.append(name)

    store.rewrite(entries)
    if added:
        logger.info("Manifest now tracks %s", ", ".join(added))
    return added
